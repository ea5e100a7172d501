from __future__ import annotations

from typing import Iterable, List

from .interface import ElevatorSnapshot, MoveInstruction


def move_towards(snapshot: ElevatorSnapshot, floor: int) -> MoveInstruction:
    """Step one floor toward ``floor``, opening the doors once there."""

    if snapshot.current_floor < floor:
        return MoveInstruction.MOVE_UP
    if snapshot.current_floor > floor:
        return MoveInstruction.MOVE_DOWN
    return MoveInstruction.OPEN_DOORS


def park(snapshot: ElevatorSnapshot) -> MoveInstruction:
    """Hold instruction used when there is no work: drift to the midpoint."""

    return move_towards(snapshot, snapshot.midpoint)


def stop_floors(snapshot: ElevatorSnapshot) -> List[int]:
    """Floors with a pickup or a dropoff, ascending and without duplicates."""

    stops = {request.origin for request in snapshot.pending}
    stops.update(rider.destination for rider in snapshot.riders)
    return sorted(stops)


def nearest_floor(floors: Iterable[int], position: int) -> int | None:
    """Closest floor to ``position``; the lower one wins a tie."""

    best: int | None = None
    for floor in sorted(floors):
        if best is None or abs(floor - position) < abs(best - position):
            best = floor
    return best
