"""Weekly schedule value type."""

from __future__ import annotations

import json
from typing import Iterable

from habitflow.core.errors import ValidationError

# 日本語: 曜日番号は 0=日 ... 6=土 / English: Weekday numbers run 0=Sunday ... 6=Saturday
SUNDAY, MONDAY, TUESDAY, WEDNESDAY, THURSDAY, FRIDAY, SATURDAY = range(7)
DAY_NAMES = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")

_WEEKDAYS = frozenset({MONDAY, TUESDAY, WEDNESDAY, THURSDAY, FRIDAY})
_WEEKEND = frozenset({SUNDAY, SATURDAY})


class Schedule(frozenset):
    """Immutable set of weekday numbers on which a habit recurs."""

    def __new__(cls, days: Iterable[int] = ()):
        values = []
        for day in days:
            # 日本語: bool は int の派生なので明示的に除外 / English: bool subclasses int, reject it explicitly
            if isinstance(day, bool) or not isinstance(day, int) or not 0 <= day <= 6:
                raise ValidationError(f"Weekday must be an integer between 0 and 6 (got {day!r}).")
            values.append(day)
        return super().__new__(cls, values)

    def __repr__(self) -> str:
        return f"Schedule({sorted(self)!r})"

    @classmethod
    def from_json(cls, raw: str | None) -> "Schedule":
        if not raw:
            return cls()
        try:
            decoded = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise ValidationError(f"Invalid schedule encoding: {raw!r}") from exc
        if not isinstance(decoded, list):
            raise ValidationError(f"Schedule must be a JSON array: {raw!r}")
        return cls(decoded)

    def to_json(self) -> str:
        return json.dumps(sorted(self))


def describe_schedule(schedule: Iterable[int]) -> str:
    days = Schedule(schedule)
    if len(days) == 7:
        return "Every day"
    if not days:
        return "No days"
    if days == _WEEKDAYS:
        return "Weekdays"
    if days == _WEEKEND:
        return "Weekends"
    return ", ".join(DAY_NAMES[day] for day in sorted(days))
