from __future__ import annotations

import random
from typing import List

from .building import Building
from .passenger import Request


class RequestGenerator:
    """Seeded per-floor Bernoulli arrivals.

    Every tick draws exactly one sample per floor, bottom to top, so two
    generators with the same seed and density stay in lockstep whatever the
    outcome of each draw.
    """

    def __init__(self, building: Building, seed: int, density: float) -> None:
        if not 0.0 <= density <= 1.0:
            raise ValueError(f"density must be within [0, 1], got {density}")
        self.building = building
        self.density = density
        self.random = random.Random(seed)
        self.generated_count = 0

    def generate_for_tick(self, tick: int) -> List[Request]:
        requests: List[Request] = []
        for floor in self.building.floors():
            if self.random.random() >= self.density:
                continue
            destination = self._choose_destination(floor)
            if destination is None:
                continue
            requests.append(Request(origin=floor, destination=destination, created_at=tick))
        self.generated_count += len(requests)
        return requests

    def _choose_destination(self, origin: int) -> int | None:
        possible_floors = [f for f in self.building.floors() if f != origin]
        if not possible_floors:
            return None
        return self.random.choice(possible_floors)
