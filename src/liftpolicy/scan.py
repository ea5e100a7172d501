from __future__ import annotations

from .interface import Direction, ElevatorSnapshot, MoveInstruction
from .utils import move_towards, nearest_floor, park, stop_floors


class ScanPolicy:
    """Implements the elevator SCAN algorithm for a single car.

    The car keeps sweeping in its current direction while any pickup or
    dropoff lies ahead, stopping at every floor with work, and only reverses
    once the sweep is exhausted.
    """

    name = "scan"

    def decide(self, snapshot: ElevatorSnapshot) -> MoveInstruction:
        if not snapshot.has_work:
            return park(snapshot)

        stops = stop_floors(snapshot)
        position = snapshot.current_floor
        if position in stops:
            return MoveInstruction.OPEN_DOORS

        above = any(floor > position for floor in stops)
        below = any(floor < position for floor in stops)
        if snapshot.direction == Direction.UP:
            return MoveInstruction.MOVE_UP if above else MoveInstruction.MOVE_DOWN
        if snapshot.direction == Direction.DOWN:
            return MoveInstruction.MOVE_DOWN if below else MoveInstruction.MOVE_UP

        target = nearest_floor(stops, position)
        return move_towards(snapshot, target)
