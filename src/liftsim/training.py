from __future__ import annotations

import logging
import math
import random
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Tuple

from liftpolicy import HeuristicPolicy, HeuristicWeights

from .config import SimulationConfig
from .metrics import combined_average
from .simulation import SimulationEngine

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, HeuristicWeights, float, bool], None]


@dataclass(frozen=True)
class TrainingReport:
    best_weights: HeuristicWeights
    best_score: float
    iterations: int
    evaluated: int
    improvements: int
    seeds: Tuple[int, ...]
    generation_window_ticks: int
    density: float
    min_floor: int
    max_floor: int

    def to_dict(self) -> Dict[str, object]:
        return {
            "best_weights": self.best_weights.model_dump(),
            "best_score": None if math.isinf(self.best_score) else self.best_score,
            "iterations": self.iterations,
            "evaluated": self.evaluated,
            "improvements": self.improvements,
            "seeds": list(self.seeds),
            "generation_window_ticks": self.generation_window_ticks,
            "density": self.density,
            "building": {"min_floor": self.min_floor, "max_floor": self.max_floor},
        }


class HeuristicTrainer:
    """Random search over heuristic weights, scored on the configured seeds.

    Lower scores are better. A candidate that leaves work behind at the drain
    cap, or completes nothing, scores ``inf`` so it can never become the best.
    """

    def __init__(self, config: SimulationConfig, seed: Optional[int] = None) -> None:
        self.config = config
        self.engine = SimulationEngine.from_config(config)
        self.random = random.Random(seed)

    def evaluate(self, weights: HeuristicWeights) -> float:
        policy = HeuristicPolicy(weights)
        results = self.engine.run_seeds(
            policy,
            self.config.seeds,
            self.config.generation_window_ticks,
            self.config.density,
        )
        if any(result.drain_cap_exceeded for result in results):
            return math.inf
        score = combined_average(result.statistics for result in results)
        return math.inf if score is None else score

    def train(
        self, iterations: int, on_progress: Optional[ProgressCallback] = None
    ) -> TrainingReport:
        if iterations < 0:
            raise ValueError("iterations must not be negative")

        best_weights = HeuristicWeights()
        best_score = self.evaluate(best_weights)
        improvements = 0
        logger.info("Default weights score %.4f", best_score)

        for iteration in range(1, iterations + 1):
            candidate = HeuristicWeights.sample(self.random)
            score = self.evaluate(candidate)
            improved = score < best_score
            if improved:
                best_weights, best_score = candidate, score
                improvements += 1
                logger.info("Iteration %s: new best score %.4f", iteration, score)
            else:
                logger.debug("Iteration %s: score %.4f", iteration, score)
            if on_progress is not None:
                on_progress(iteration, candidate, score, improved)

        return TrainingReport(
            best_weights=best_weights,
            best_score=best_score,
            iterations=iterations,
            evaluated=iterations + 1,
            improvements=improvements,
            seeds=tuple(self.config.seeds),
            generation_window_ticks=self.config.generation_window_ticks,
            density=self.config.density,
            min_floor=self.config.min_floor,
            max_floor=self.config.max_floor,
        )
