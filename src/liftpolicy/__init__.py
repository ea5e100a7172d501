from __future__ import annotations

from typing import Callable, Dict, List

from .fifo import FirstInFirstOutPolicy
from .heuristic import HeuristicPolicy, HeuristicWeights
from .interface import (
    ActiveRider,
    Direction,
    DispatchPolicy,
    ElevatorSnapshot,
    MoveInstruction,
    PendingRequest,
)
from .scan import ScanPolicy

__all__ = [
    "ActiveRider",
    "Direction",
    "DispatchPolicy",
    "ElevatorSnapshot",
    "FirstInFirstOutPolicy",
    "HeuristicPolicy",
    "HeuristicWeights",
    "MoveInstruction",
    "POLICY_REGISTRY",
    "PendingRequest",
    "ScanPolicy",
    "available_policies",
    "get_policy",
    "register_policy",
]


PolicyFactory = Callable[..., DispatchPolicy]

POLICY_REGISTRY: Dict[str, PolicyFactory] = {
    "fifo": FirstInFirstOutPolicy,
    "scan": ScanPolicy,
    "heuristic": HeuristicPolicy,
}


def register_policy(name: str, factory: PolicyFactory, replace: bool = False) -> None:
    key = name.lower()
    if key in POLICY_REGISTRY and not replace:
        raise ValueError(f"Policy '{name}' is already registered")
    POLICY_REGISTRY[key] = factory


def available_policies() -> List[str]:
    return sorted(POLICY_REGISTRY)


def get_policy(name: str, **kwargs) -> DispatchPolicy:
    factory = POLICY_REGISTRY.get(name.lower())
    if factory is None:
        raise ValueError(f"Unknown policy '{name}'. Available: {', '.join(available_policies())}")
    return factory(**kwargs)
