from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional

from .passenger import CompletionRecord


@dataclass(frozen=True)
class Statistics:
    """Latency totals of one run, or of several runs combined."""

    completed_count: int = 0
    total_wait_ticks: int = 0
    total_travel_ticks: int = 0

    @property
    def average_wait(self) -> Optional[float]:
        if not self.completed_count:
            return None
        return self.total_wait_ticks / self.completed_count

    @property
    def average_travel(self) -> Optional[float]:
        if not self.completed_count:
            return None
        return self.total_travel_ticks / self.completed_count

    @property
    def average_total_time(self) -> Optional[float]:
        """Mean wait + travel per completed request, ``None`` without data."""
        if not self.completed_count:
            return None
        return (self.total_wait_ticks + self.total_travel_ticks) / self.completed_count

    def to_dict(self) -> Dict[str, object]:
        return {
            "completed_count": self.completed_count,
            "total_wait_ticks": self.total_wait_ticks,
            "total_travel_ticks": self.total_travel_ticks,
            "average_wait": self.average_wait,
            "average_travel": self.average_travel,
            "average_total_time": self.average_total_time,
        }


class StatisticsAggregator:
    def __init__(self) -> None:
        self.wait_times: List[int] = []
        self.travel_times: List[int] = []

    def record(self, record: CompletionRecord) -> None:
        self.wait_times.append(record.wait_ticks)
        self.travel_times.append(record.travel_ticks)

    def record_all(self, records: Iterable[CompletionRecord]) -> None:
        for record in records:
            self.record(record)

    def statistics(self) -> Statistics:
        return Statistics(
            completed_count=len(self.wait_times),
            total_wait_ticks=sum(self.wait_times),
            total_travel_ticks=sum(self.travel_times),
        )

    def percentile(self, kind: str, percentile: float) -> float:
        """Interpolated percentile (0-100) of ``wait``, ``travel`` or ``total`` ticks."""
        if kind == "wait":
            values = self.wait_times
        elif kind == "travel":
            values = self.travel_times
        elif kind == "total":
            values = [w + t for w, t in zip(self.wait_times, self.travel_times)]
        else:
            raise ValueError(f"Unknown latency kind '{kind}'")
        return _percentile(values, percentile)


def combine(stats: Iterable[Statistics]) -> Statistics:
    completed = 0
    wait = 0
    travel = 0
    for item in stats:
        completed += item.completed_count
        wait += item.total_wait_ticks
        travel += item.total_travel_ticks
    return Statistics(completed_count=completed, total_wait_ticks=wait, total_travel_ticks=travel)


def combined_average(stats: Iterable[Statistics]) -> Optional[float]:
    """Average total time across runs, weighted by each run's completed count."""
    weighted = 0.0
    completed = 0
    for item in stats:
        if not item.completed_count:
            continue
        weighted += item.average_total_time * item.completed_count
        completed += item.completed_count
    if not completed:
        return None
    return weighted / completed


def _percentile(values: List[int], percentile: float) -> float:
    if not values:
        return 0.0
    sorted_vals = sorted(values)
    k = (len(sorted_vals) - 1) * min(max(percentile, 0.0), 100.0) / 100
    f = math.floor(k)
    c = math.ceil(k)
    if f == c:
        return float(sorted_vals[int(k)])
    d0 = sorted_vals[int(f)] * (c - k)
    d1 = sorted_vals[int(c)] * (k - f)
    return float(d0 + d1)
