from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Mapping, Optional

from liftpolicy import POLICY_REGISTRY, DispatchPolicy

from .config import SimulationConfig
from .metrics import Statistics, combine, combined_average
from .simulation import RunResult, SimulationEngine

logger = logging.getLogger(__name__)


@dataclass
class TournamentEntry:
    name: str
    results: List[RunResult] = field(default_factory=list)

    @property
    def score(self) -> Optional[float]:
        return combined_average(result.statistics for result in self.results)

    @property
    def drain_cap_hits(self) -> int:
        return sum(1 for result in self.results if result.drain_cap_exceeded)

    @property
    def statistics(self) -> Statistics:
        return combine(result.statistics for result in self.results)

    @property
    def qualified(self) -> bool:
        return self.drain_cap_hits == 0 and self.score is not None

    def to_dict(self) -> Dict[str, object]:
        return {
            "name": self.name,
            "score": self.score,
            "qualified": self.qualified,
            "drain_cap_hits": self.drain_cap_hits,
            "statistics": self.statistics.to_dict(),
            "runs": [result.to_dict() for result in self.results],
        }


def run_tournament(
    config: SimulationConfig,
    policies: Optional[Mapping[str, Callable[[], DispatchPolicy]]] = None,
) -> List[TournamentEntry]:
    """Run every policy over ``config.seeds`` and rank them.

    Policies with a drain cap hit, or without a single completion, are
    ranked after all qualified ones rather than averaged in.
    """

    factories = policies if policies is not None else POLICY_REGISTRY
    engine = SimulationEngine.from_config(config)
    entries: List[TournamentEntry] = []
    for name in sorted(factories):
        entry = TournamentEntry(name=name)
        for seed in config.seeds:
            policy = factories[name]()
            entry.results.append(
                engine.run(policy, seed, config.generation_window_ticks, config.density)
            )
        logger.info(
            "Policy %s scored %s over %s seeds (drain cap hits: %s)",
            name, entry.score, len(config.seeds), entry.drain_cap_hits,
        )
        entries.append(entry)

    qualified = sorted((e for e in entries if e.qualified), key=lambda e: (e.score, e.name))
    disqualified = sorted((e for e in entries if not e.qualified), key=lambda e: e.name)
    return qualified + disqualified
