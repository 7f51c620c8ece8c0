"""
Escalation policy: offense count -> block tier.

With ESCALATE_1=1, ESCALATE_2=3, ESCALATE_3=7:

    offense 1 -> 01:00:00 on the temporary list
    offense 2 -> 03:00:00
    offense 3 -> 07:00:00
    offense 4+ -> permanent list, timeout "0"
"""

from dataclasses import dataclass
from typing import Sequence

# RouterOS address-list timeout meaning "no expiry".
PERMANENT_TIMEOUT = "0"


@dataclass(frozen=True)
class Outcome:
    """Result of one escalation decision."""

    attempt: int
    timeout: str
    permanent: bool


def format_timeout(hours: int) -> str:
    """Hours as a RouterOS duration, e.g. 3 -> "03:00:00"."""
    return f"{hours:02d}:00:00"


def decide(count: int, schedule: Sequence[int]) -> Outcome:
    """
    Map an offense count (>= 1) to a timed or permanent outcome.

    schedule[count - 1] hours while the count is within the schedule,
    permanent after that. An empty schedule makes every offense permanent.
    """
    if count < 1:
        raise ValueError(f"offense count must be >= 1, got {count}")
    if count <= len(schedule):
        return Outcome(attempt=count, timeout=format_timeout(schedule[count - 1]), permanent=False)
    return Outcome(attempt=count, timeout=PERMANENT_TIMEOUT, permanent=True)
