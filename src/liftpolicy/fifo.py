from __future__ import annotations

from typing import List, Tuple

from .interface import ElevatorSnapshot, MoveInstruction
from .utils import move_towards, park


class FirstInFirstOutPolicy:
    """Serves the oldest outstanding request or rider, one at a time."""

    name = "fifo"

    def decide(self, snapshot: ElevatorSnapshot) -> MoveInstruction:
        if not snapshot.has_work:
            return park(snapshot)
        return move_towards(snapshot, self._target_floor(snapshot))

    def _target_floor(self, snapshot: ElevatorSnapshot) -> int:
        # Riders come first so they win ties against requests of the same age.
        candidates: List[Tuple[int, int]] = [
            (rider.created_at, rider.destination) for rider in snapshot.riders
        ]
        candidates.extend(
            (request.created_at, request.origin) for request in snapshot.pending
        )
        _, floor = min(candidates, key=lambda item: item[0])
        return floor
