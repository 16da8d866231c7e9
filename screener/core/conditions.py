"""
Fail Predicates
---------------
ONE place decides whether an answer ends the screening, and why.

fail_reason() is pure given its inputs: thresholds are passed in by the
engine, which resolves them from settings on every evaluation.
"""
from __future__ import annotations

from typing import Optional, Union

from screener.core.catalog import HOURS_MAP


def fail_reason(
    key: str,
    value: Union[str, int],
    *,
    min_weekly_hours: int,
    max_age: Optional[int] = None,
) -> Optional[str]:
    """
    Returns a human-readable failure reason if `value` for answer `key` fails
    the screening, else None. Keys without a rule (start_date, student_types)
    never fail.
    """
    if key == "team_role" and value == "no":
        return "Team role: not applying as a SpanishVIP team member"

    if key == "weekly_availability":
        hours = HOURS_MAP.get(str(value), 0)
        if hours < min_weekly_hours:
            return (
                f"Weekly availability (approx. {hours}h/week) is below "
                f"the minimum required ({min_weekly_hours}h/week)"
            )

    if key == "setup" and value == "no":
        return "Setup: does not have stable internet and/or a professional teaching space"

    if key == "sop" and value == "no":
        return "SOP agreement: unwilling to follow SpanishVIP curriculum and SOPs"

    if key == "english_level" and value == "low":
        return "English level: too low to support beginner students"

    if key == "age" and max_age is not None:
        if int(value) >= max_age:
            return f"Age: {value} is above the maximum for this position (under {max_age})"

    return None
