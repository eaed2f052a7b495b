"""Reason models.

Reasons are tagged variants: a code plus the numbers/names that triggered it.
"""

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any

from src.data.models.enums import Goal, Region
from src.engine.models.enums import ReasonCode


def _freeze(value: Any) -> Any:
    if isinstance(value, (list, tuple)):
        return tuple(_freeze(v) for v in value)
    return value


class ReasonParams(Mapping):
    """Read-only, hashable parameter mapping.

    List values are stored as tuples so shared results cannot be edited
    in place.
    """

    __slots__ = ("_items",)

    def __init__(self, params: Mapping[str, Any] | None = None):
        self._items = tuple(sorted((k, _freeze(v)) for k, v in (params or {}).items()))

    def __getitem__(self, key: str) -> Any:
        for k, v in self._items:
            if k == key:
                return v
        raise KeyError(key)

    def __iter__(self) -> Iterator[str]:
        return (k for k, _ in self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __hash__(self) -> int:
        return hash(self._items)

    def __repr__(self) -> str:
        return f"ReasonParams({dict(self._items)!r})"


@dataclass(frozen=True)
class Reason:
    """One threshold-triggered reason.

    Attributes:
        code: What triggered.
        params: Values needed to render the reason (rates, symbols, regions).
    """

    code: ReasonCode
    params: ReasonParams = field(default_factory=ReasonParams)

    def __post_init__(self):
        if not isinstance(self.params, ReasonParams):
            object.__setattr__(self, "params", ReasonParams(self.params))

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "code": self.code.value,
            "params": {k: list(v) if isinstance(v, tuple) else v for k, v in self.params.items()},
        }


@dataclass(frozen=True)
class AllocationReason:
    """Why a region appears in a goal's target allocation.

    Attributes:
        region: Target region.
        inflation_rate: Region's current inflation (%).
        goal: Goal whose table produced the allocation.
    """

    region: Region
    inflation_rate: float
    goal: Goal

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "region": self.region.value,
            "inflation_rate": self.inflation_rate,
            "goal": self.goal.value,
        }
