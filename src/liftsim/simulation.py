from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List

from liftpolicy import DispatchPolicy, MoveInstruction

from .building import Building
from .config import SimulationConfig
from .elevator import ElevatorState
from .errors import OutOfRangeMoveError
from .generator import RequestGenerator
from .metrics import Statistics, StatisticsAggregator

logger = logging.getLogger(__name__)

DEFAULT_DRAIN_CAP_TICKS = 10_000


@dataclass(frozen=True)
class TickEvent:
    tick: int
    phase: str  # "generation" or "drain"
    instruction: MoveInstruction
    floor: int
    pending: int
    riders: int


@dataclass(frozen=True)
class RunResult:
    """Outcome of one run; ``drain_cap_exceeded`` marks partial statistics."""

    policy_name: str
    seed: int
    statistics: Statistics
    generated_count: int
    final_floor: int
    ticks_elapsed: int
    drain_ticks: int
    drain_cap_exceeded: bool
    pending_remaining: int
    riders_remaining: int

    @property
    def completed(self) -> bool:
        return not self.drain_cap_exceeded

    def to_dict(self) -> Dict[str, object]:
        return {
            "policy": self.policy_name,
            "seed": self.seed,
            "statistics": self.statistics.to_dict(),
            "generated_count": self.generated_count,
            "final_floor": self.final_floor,
            "ticks_elapsed": self.ticks_elapsed,
            "drain_ticks": self.drain_ticks,
            "drain_cap_exceeded": self.drain_cap_exceeded,
            "pending_remaining": self.pending_remaining,
            "riders_remaining": self.riders_remaining,
        }


def policy_name(policy: DispatchPolicy) -> str:
    return getattr(policy, "name", type(policy).__name__)


class SimulationEngine:
    """Tick-stepped single elevator simulation.

    A run first generates requests for ``generation_window_ticks`` ticks and
    then drains: it keeps ticking without new arrivals until every request is
    delivered or ``drain_cap_ticks`` drain ticks have passed. Each run builds
    its own state and generator, so one engine can serve many runs.
    """

    def __init__(self, building: Building, drain_cap_ticks: int = DEFAULT_DRAIN_CAP_TICKS) -> None:
        if drain_cap_ticks < 1:
            raise ValueError("drain_cap_ticks must be positive")
        self.building = building
        self.drain_cap_ticks = drain_cap_ticks
        self.event_hooks: Dict[str, List[Callable[[object], None]]] = {}

    @classmethod
    def from_config(cls, config: SimulationConfig) -> "SimulationEngine":
        return cls(config.building(), drain_cap_ticks=config.drain_cap_ticks)

    def on_event(self, event: str, callback: Callable[[object], None]) -> None:
        self.event_hooks.setdefault(event, []).append(callback)

    def run(
        self,
        policy: DispatchPolicy,
        seed: int,
        generation_window_ticks: int,
        density: float,
    ) -> RunResult:
        if generation_window_ticks < 0:
            raise ValueError("generation_window_ticks must not be negative")

        name = policy_name(policy)
        state = ElevatorState.parked(self.building)
        generator = RequestGenerator(self.building, seed, density)
        aggregator = StatisticsAggregator()
        logger.debug(
            "Starting run policy=%s seed=%s window=%s density=%s",
            name, seed, generation_window_ticks, density,
        )

        for tick in range(generation_window_ticks):
            state.add_requests(generator.generate_for_tick(tick))
            self._step(state, policy, aggregator, tick, "generation", name, seed)

        tick = generation_window_ticks
        drain_ticks = 0
        while state.has_work() and drain_ticks < self.drain_cap_ticks:
            self._step(state, policy, aggregator, tick, "drain", name, seed)
            tick += 1
            drain_ticks += 1

        exceeded = state.has_work()
        if exceeded:
            logger.warning(
                "Drain cap of %s ticks hit: policy=%s seed=%s pending=%s riders=%s",
                self.drain_cap_ticks, name, seed,
                len(state.pending_requests), len(state.active_riders),
            )

        result = RunResult(
            policy_name=name,
            seed=seed,
            statistics=aggregator.statistics(),
            generated_count=generator.generated_count,
            final_floor=state.current_floor,
            ticks_elapsed=tick,
            drain_ticks=drain_ticks,
            drain_cap_exceeded=exceeded,
            pending_remaining=len(state.pending_requests),
            riders_remaining=len(state.active_riders),
        )
        logger.debug(
            "Finished run policy=%s seed=%s completed=%s ticks=%s",
            name, seed, result.statistics.completed_count, tick,
        )
        return result

    def run_seeds(
        self,
        policy: DispatchPolicy,
        seeds: Iterable[int],
        generation_window_ticks: int,
        density: float,
    ) -> List[RunResult]:
        return [
            self.run(policy, seed, generation_window_ticks, density) for seed in seeds
        ]

    def _step(
        self,
        state: ElevatorState,
        policy: DispatchPolicy,
        aggregator: StatisticsAggregator,
        tick: int,
        phase: str,
        name: str,
        seed: int,
    ) -> None:
        instruction = policy.decide(state.snapshot())
        try:
            completed = state.apply(instruction, tick)
        except OutOfRangeMoveError as exc:
            exc.annotate(name, seed, tick)
            logger.error("Policy contract violation: %s", exc)
            raise

        aggregator.record_all(completed)
        for record in completed:
            self._emit("completion", {"tick": tick, "record": record})

        self._emit(
            "tick",
            TickEvent(
                tick=tick,
                phase=phase,
                instruction=instruction,
                floor=state.current_floor,
                pending=len(state.pending_requests),
                riders=len(state.active_riders),
            ),
        )

    def _emit(self, event: str, payload: object) -> None:
        for callback in self.event_hooks.get(event, []):
            callback(payload)
