"""
Function Modification Value Objects

Architectural Intent:
- Explicit sum type for a best-effort function lookup:
  Observed(timestamp) | Unavailable(reason)
- Callers can tell "really old" apart from "unknown" instead of reading a
  sentinel epoch timestamp
- EarliestModification reduces a whole scan to the signal the necessity
  evaluator needs
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum, auto
from typing import Optional, Union


class UnavailableReason(Enum):
    NOT_FOUND = auto()
    ACCESS_DENIED = auto()
    ERROR = auto()


@dataclass(frozen=True)
class Observed:
    function_name: str
    last_modified: datetime


@dataclass(frozen=True)
class Unavailable:
    function_name: str
    reason: UnavailableReason
    details: str = ""


FunctionModification = Union[Observed, Unavailable]


@dataclass(frozen=True)
class EarliestModification:
    """
    Least recent modification across every function of a service.

    timestamp is None when the service declares no functions or when any
    function could not be read; both mean a skip cannot be proven safe.
    """
    timestamp: Optional[datetime]
    unavailable: tuple[Unavailable, ...] = field(default_factory=tuple)

    @property
    def is_known(self) -> bool:
        return self.timestamp is not None

    @property
    def access_denied(self) -> bool:
        return any(
            u.reason == UnavailableReason.ACCESS_DENIED for u in self.unavailable
        )

    @staticmethod
    def reduce(modifications: list[FunctionModification]) -> "EarliestModification":
        unavailable = tuple(m for m in modifications if isinstance(m, Unavailable))
        observed = [m.last_modified for m in modifications if isinstance(m, Observed)]

        if unavailable or not observed:
            return EarliestModification(timestamp=None, unavailable=unavailable)

        return EarliestModification(timestamp=min(observed))
