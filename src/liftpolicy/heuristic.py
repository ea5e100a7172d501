from __future__ import annotations

import random
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

from .interface import Direction, ElevatorSnapshot, MoveInstruction
from .utils import move_towards, park


class HeuristicWeights(BaseModel):
    """Tunable multipliers of the scored policy.

    ``pickup_bias``, ``dropoff_bias``, ``open_door_bias`` and
    ``direction_bias`` multiply; ``heat_map_bias`` scales an additive term,
    so 0 disables neighbour smoothing and 1 disables the direction bonus.
    """

    model_config = ConfigDict(frozen=True)

    pickup_bias: float = Field(default=2.0, ge=0.0)
    dropoff_bias: float = Field(default=1.0, ge=0.0)
    open_door_bias: float = Field(default=5_000_000.0, gt=0.0)
    heat_map_bias: float = Field(default=0.8, ge=0.0)
    direction_bias: float = Field(default=3.0, ge=0.0)

    @classmethod
    def sample(cls, rng: random.Random) -> "HeuristicWeights":
        """Draw a training candidate; the direction bonus stays neutral."""

        return cls(
            pickup_bias=rng.random() * 1.0 + 0.5,
            dropoff_bias=rng.random() * 1.0 + 0.5,
            open_door_bias=rng.random() * 5.0 + 1.0,
            heat_map_bias=rng.random() * 1.0,
            direction_bias=1.0,
        )


class HeuristicPolicy:
    """Scores every floor and heads for the most attractive one.

    The score of a floor is built in three passes:

    1. pickups and dropoffs waiting there, weighted by their biases, with a
       large multiplier when the car is already at that floor;
    2. a heat map that adds the scaled average of the floor and its in-range
       neighbours, so clusters of demand pull harder than isolated calls;
    3. a bonus for floors that lie ahead in the current travel direction,
       which keeps the car from reversing needlessly.

    The highest score wins and ties go to the lowest floor.
    """

    name = "heuristic"

    def __init__(self, weights: Optional[HeuristicWeights] = None, **overrides: float) -> None:
        base = weights or HeuristicWeights()
        self.weights = HeuristicWeights(**{**base.model_dump(), **overrides}) if overrides else base

    def decide(self, snapshot: ElevatorSnapshot) -> MoveInstruction:
        if not snapshot.has_work:
            return park(snapshot)

        scores = self.score_floors(snapshot)
        best_floor = snapshot.min_floor
        for floor in snapshot.floors():
            if scores[floor] > scores[best_floor]:
                best_floor = floor

        if best_floor == snapshot.current_floor:
            return MoveInstruction.OPEN_DOORS
        return move_towards(snapshot, best_floor)

    def score_floors(self, snapshot: ElevatorSnapshot) -> Dict[int, float]:
        base = self._base_scores(snapshot)
        scores = self._add_heat_map(snapshot, base)
        self._apply_direction_bias(snapshot, scores)
        return scores

    def _base_scores(self, snapshot: ElevatorSnapshot) -> Dict[int, float]:
        base: Dict[int, float] = {}
        for floor in snapshot.floors():
            score = snapshot.pickups_at(floor) * self.weights.pickup_bias
            score += snapshot.dropoffs_at(floor) * self.weights.dropoff_bias
            if floor == snapshot.current_floor:
                score *= self.weights.open_door_bias
            base[floor] = score
        return base

    def _add_heat_map(
        self, snapshot: ElevatorSnapshot, base: Dict[int, float]
    ) -> Dict[int, float]:
        scores: Dict[int, float] = {}
        for floor in snapshot.floors():
            neighbourhood = [
                base[neighbour]
                for neighbour in (floor - 1, floor, floor + 1)
                if snapshot.min_floor <= neighbour <= snapshot.max_floor
            ]
            heat = sum(neighbourhood) / len(neighbourhood)
            scores[floor] = base[floor] + heat * self.weights.heat_map_bias
        return scores

    def _apply_direction_bias(
        self, snapshot: ElevatorSnapshot, scores: Dict[int, float]
    ) -> None:
        position = snapshot.current_floor
        if snapshot.direction == Direction.UP:
            ahead = range(position + 1, snapshot.max_floor + 1)
        elif snapshot.direction == Direction.DOWN:
            ahead = range(snapshot.min_floor, position)
        else:
            return
        for floor in ahead:
            scores[floor] *= self.weights.direction_bias
