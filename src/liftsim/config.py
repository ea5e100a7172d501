from __future__ import annotations

import json
from pathlib import Path
from typing import Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .building import Building


class SimulationConfig(BaseModel):
    """Immutable run parameters shared by single runs, tournaments and training."""

    model_config = ConfigDict(frozen=True)

    min_floor: int = 0
    max_floor: int = 9
    generation_window_ticks: int = Field(default=20, ge=0)
    density: float = Field(default=0.30, ge=0.0, le=1.0)
    drain_cap_ticks: int = Field(default=10_000, ge=1)
    seed: int = 42017
    seeds: Tuple[int, ...] = Field(
        default=(42017, 12345, 99999, 54321, 77777), min_length=1
    )

    @model_validator(mode="after")
    def check_floor_range(self) -> "SimulationConfig":
        if self.min_floor > self.max_floor:
            raise ValueError("min_floor must not be above max_floor")
        return self

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "SimulationConfig":
        data = json.loads(Path(path).read_text(encoding="utf-8"))
        return cls(**data)

    def building(self) -> Building:
        return Building(min_floor=self.min_floor, max_floor=self.max_floor)
