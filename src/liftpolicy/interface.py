from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Protocol, Tuple


class Direction(str, Enum):
    UP = "up"
    DOWN = "down"
    IDLE = "idle"


class MoveInstruction(str, Enum):
    """The only vocabulary a policy may answer with."""

    MOVE_UP = "move_up"
    MOVE_DOWN = "move_down"
    OPEN_DOORS = "open_doors"


@dataclass(frozen=True)
class PendingRequest:
    """Representation of a request still waiting at its origin floor."""

    origin: int
    destination: int
    created_at: int


@dataclass(frozen=True)
class ActiveRider:
    """Representation of a passenger already inside the car."""

    origin: int
    destination: int
    created_at: int
    picked_up_at: int


@dataclass(frozen=True)
class ElevatorSnapshot:
    """Read-only view of the elevator handed to policies each tick."""

    current_floor: int
    direction: Direction
    min_floor: int
    max_floor: int
    pending: Tuple[PendingRequest, ...] = ()
    riders: Tuple[ActiveRider, ...] = ()

    @property
    def has_work(self) -> bool:
        return bool(self.pending or self.riders)

    @property
    def midpoint(self) -> int:
        return self.min_floor + (self.max_floor - self.min_floor) // 2

    def floors(self) -> range:
        return range(self.min_floor, self.max_floor + 1)

    def pickups_at(self, floor: int) -> int:
        return sum(1 for request in self.pending if request.origin == floor)

    def dropoffs_at(self, floor: int) -> int:
        return sum(1 for rider in self.riders if rider.destination == floor)


class DispatchPolicy(Protocol):
    """Strategy interface for driving the elevator one tick at a time."""

    name: str

    def decide(self, snapshot: ElevatorSnapshot) -> MoveInstruction:
        """
        Return the instruction for the current tick.

        Implementations must not keep state between calls beyond their own
        parameters, and must always answer with a valid instruction, holding
        toward a default floor when there is nothing to do.
        """
        ...
