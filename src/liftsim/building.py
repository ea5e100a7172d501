from __future__ import annotations

from dataclasses import dataclass

from .errors import InvalidRangeError


@dataclass(frozen=True)
class Building:
    """Inclusive floor range served by the elevator."""

    min_floor: int
    max_floor: int

    def __post_init__(self) -> None:
        if self.min_floor > self.max_floor:
            raise InvalidRangeError(
                f"min_floor ({self.min_floor}) is above max_floor ({self.max_floor})"
            )

    @property
    def num_floors(self) -> int:
        return self.max_floor - self.min_floor + 1

    @property
    def midpoint(self) -> int:
        return self.min_floor + (self.max_floor - self.min_floor) // 2

    def floors(self) -> range:
        return range(self.min_floor, self.max_floor + 1)

    def contains(self, floor: int) -> bool:
        return self.min_floor <= floor <= self.max_floor
