from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Request:
    """A passenger waiting at ``origin`` since ``created_at``."""

    origin: int
    destination: int
    created_at: int

    def __post_init__(self) -> None:
        if self.origin == self.destination:
            raise ValueError(f"Request origin and destination are both floor {self.origin}")

    def board(self, tick: int) -> "Rider":
        return Rider(
            origin=self.origin,
            destination=self.destination,
            created_at=self.created_at,
            picked_up_at=tick,
        )


@dataclass(frozen=True)
class Rider:
    """A passenger inside the car."""

    origin: int
    destination: int
    created_at: int
    picked_up_at: int

    def alight(self, tick: int) -> "CompletionRecord":
        return CompletionRecord(
            wait_ticks=self.picked_up_at - self.created_at,
            travel_ticks=tick - self.picked_up_at,
        )


@dataclass(frozen=True)
class CompletionRecord:
    wait_ticks: int
    travel_ticks: int

    def __post_init__(self) -> None:
        if self.wait_ticks < 0 or self.travel_ticks < 0:
            raise ValueError(f"Negative latency in {self!r}")

    @property
    def total_ticks(self) -> int:
        return self.wait_ticks + self.travel_ticks
