"""
Priority ranking used to choose cluster seeds.
"""
from typing import Any, List, Optional, Sequence

from ticketcluster.core_types import Priority

PRIORITY_RANK = {
    Priority.CRITICAL.value: 4,
    Priority.HIGH.value: 3,
    Priority.MEDIUM.value: 2,
    Priority.LOW.value: 1,
}
DEFAULT_RANK = PRIORITY_RANK[Priority.LOW.value]


def priority_rank(priority: Optional[Any]) -> int:
    """Rank of a priority value; missing or unknown values rank as Low."""
    if isinstance(priority, Priority):
        priority = priority.value
    return PRIORITY_RANK.get(priority, DEFAULT_RANK)


def rank_tickets(tickets: Sequence[Any], enabled: bool = True) -> List[int]:
    """
    Return input positions in seed order.

    With ranking enabled, positions are sorted by descending priority rank.
    `sorted` is stable, so tickets of equal rank keep their input order.
    """
    positions = list(range(len(tickets)))
    if not enabled:
        return positions
    return sorted(
        positions,
        key=lambda idx: -priority_rank(getattr(tickets[idx], 'priority', None))
    )
