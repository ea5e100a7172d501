from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List

from liftpolicy import ActiveRider, Direction, ElevatorSnapshot, MoveInstruction, PendingRequest

from .building import Building
from .errors import InvalidRangeError, OutOfRangeMoveError
from .passenger import CompletionRecord, Request, Rider


@dataclass
class ElevatorState:
    """Runtime state of the single car; only the engine mutates it."""

    building: Building
    current_floor: int
    direction: Direction = Direction.IDLE
    pending_requests: List[Request] = field(default_factory=list)
    active_riders: List[Rider] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.building.contains(self.current_floor):
            raise InvalidRangeError(f"Floor {self.current_floor} is outside the building")

    @classmethod
    def parked(cls, building: Building) -> "ElevatorState":
        return cls(building=building, current_floor=building.min_floor)

    def has_work(self) -> bool:
        return bool(self.pending_requests or self.active_riders)

    def add_requests(self, requests: Iterable[Request]) -> None:
        for request in requests:
            if not (
                self.building.contains(request.origin)
                and self.building.contains(request.destination)
            ):
                raise InvalidRangeError(f"{request!r} is outside the building")
            self.pending_requests.append(request)

    def apply(self, instruction: MoveInstruction, tick: int) -> List[CompletionRecord]:
        if instruction == MoveInstruction.MOVE_UP:
            self._move(1, Direction.UP, instruction)
            return []
        if instruction == MoveInstruction.MOVE_DOWN:
            self._move(-1, Direction.DOWN, instruction)
            return []
        if instruction == MoveInstruction.OPEN_DOORS:
            return self._open_doors(tick)
        raise ValueError(f"Unknown instruction {instruction!r}")

    def snapshot(self) -> ElevatorSnapshot:
        return ElevatorSnapshot(
            current_floor=self.current_floor,
            direction=self.direction,
            min_floor=self.building.min_floor,
            max_floor=self.building.max_floor,
            pending=tuple(
                PendingRequest(
                    origin=request.origin,
                    destination=request.destination,
                    created_at=request.created_at,
                )
                for request in self.pending_requests
            ),
            riders=tuple(
                ActiveRider(
                    origin=rider.origin,
                    destination=rider.destination,
                    created_at=rider.created_at,
                    picked_up_at=rider.picked_up_at,
                )
                for rider in self.active_riders
            ),
        )

    def _move(self, step: int, direction: Direction, instruction: MoveInstruction) -> None:
        target = self.current_floor + step
        if not self.building.contains(target):
            raise OutOfRangeMoveError(self.current_floor, instruction.value)
        self.current_floor = target
        self.direction = direction

    def _open_doors(self, tick: int) -> List[CompletionRecord]:
        floor = self.current_floor

        # Alight
        completed: List[CompletionRecord] = []
        remaining_riders: List[Rider] = []
        for rider in self.active_riders:
            if rider.destination == floor:
                completed.append(rider.alight(tick))
            else:
                remaining_riders.append(rider)
        self.active_riders = remaining_riders

        # Board
        still_waiting: List[Request] = []
        for request in self.pending_requests:
            if request.origin == floor:
                self.active_riders.append(request.board(tick))
            else:
                still_waiting.append(request)
        self.pending_requests = still_waiting
        return completed
