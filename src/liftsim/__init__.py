"""Single elevator simulation core for comparing dispatch policies."""

from .building import Building
from .config import SimulationConfig
from .elevator import ElevatorState
from .errors import InvalidRangeError, OutOfRangeMoveError, SimulationError
from .generator import RequestGenerator
from .metrics import Statistics, StatisticsAggregator, combine, combined_average
from .passenger import CompletionRecord, Request, Rider
from .simulation import RunResult, SimulationEngine, TickEvent

__all__ = [
    "Building",
    "CompletionRecord",
    "ElevatorState",
    "InvalidRangeError",
    "OutOfRangeMoveError",
    "Request",
    "RequestGenerator",
    "Rider",
    "RunResult",
    "SimulationConfig",
    "SimulationEngine",
    "SimulationError",
    "Statistics",
    "StatisticsAggregator",
    "TickEvent",
    "combine",
    "combined_average",
]
