"""Deterministic helpers shared by the jurisdiction policy generators.

Answer maps arrive straight from the wizard: keys for questions that were
never shown are simply missing, and select values are whatever string the
client sent. ``Answers`` normalises both cases so the generators can branch
without guarding every lookup.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Iterable, List, Mapping, Optional, Type, TypeVar

from .schema import Section

E = TypeVar("E", bound=Enum)

UNSPECIFIED_PURPOSE = "unspecified purposes"
NEXT_STEPS_HEADING = "Recommended Next Steps"


class Answers:
    """Read-only view over one jurisdiction's answer map."""

    __slots__ = ("_raw",)

    def __init__(self, raw: Optional[Mapping[str, Any]] = None):
        self._raw = dict(raw or {})

    def flag(self, key: str) -> bool:
        """Boolean answer; absent or unset answers are False."""
        return bool(self._raw.get(key))

    def raw(self, key: str) -> Any:
        return self._raw.get(key)

    def choice(self, key: str, enum_cls: Type[E]) -> Optional[E]:
        """Select answer as an enum member, or None if absent / unrecognised."""
        value = self._raw.get(key)
        if value is None:
            return None
        try:
            return enum_cls(value)
        except ValueError:
            return None


def is_high_risk(purpose: Any, high_risk: Iterable[Any], *flags: bool) -> bool:
    """Purpose in the high-risk set OR any explicit impact flag set."""
    return purpose in frozenset(high_risk) or any(flags)


def describe(value: Any, labels: Mapping[Any, str]) -> str:
    """Render an answer value as prose, echoing unknown values unchanged."""
    if value is None:
        return UNSPECIFIED_PURPOSE
    if isinstance(value, Enum):
        value = value.value
    try:
        return labels.get(value, str(value))
    except TypeError:
        # unhashable (list / dict) answers from a malformed client
        return str(value)


def bullets(items: Iterable[str]) -> str:
    return "".join(f"• {item}\n" for item in items)


def numbered(items: Iterable[str]) -> str:
    return "\n".join(f"{i}. {item}" for i, item in enumerate(items, start=1))


def next_steps(steps: List[str]) -> Section:
    """Numbered 'Recommended Next Steps' section; callers always pass closers."""
    return Section(heading=NEXT_STEPS_HEADING, body=numbered(steps))
