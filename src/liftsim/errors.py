from __future__ import annotations

from typing import Optional


class SimulationError(Exception):
    """Base class for errors raised by the simulation core."""


class InvalidRangeError(SimulationError, ValueError):
    """Raised for an empty floor range or a floor outside the building."""


class OutOfRangeMoveError(SimulationError):
    """A policy asked the car to move past the top or bottom floor."""

    def __init__(self, floor: int, instruction: str) -> None:
        self.floor = floor
        self.instruction = instruction
        self.policy: Optional[str] = None
        self.seed: Optional[int] = None
        self.tick: Optional[int] = None
        super().__init__(floor, instruction)

    def annotate(self, policy: str, seed: int, tick: int) -> None:
        self.policy = policy
        self.seed = seed
        self.tick = tick

    def __str__(self) -> str:
        message = f"cannot {self.instruction} from floor {self.floor}"
        if self.policy is not None:
            message += f" (policy={self.policy}, seed={self.seed}, tick={self.tick})"
        return message
