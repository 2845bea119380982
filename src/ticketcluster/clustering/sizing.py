"""
Cluster sizing policies.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional

DEFAULT_MIN_SIZE = 2
DEFAULT_MAX_SIZE = 5


class SizingMode(Enum):
    PRECISE = 'precise'
    MIN_MAX = 'min_max'
    LEGACY = 'legacy'
    DEFAULT = 'default'


@dataclass(frozen=True)
class SizingPolicy:
    """How many tickets a seed must gather, and how many it may take."""
    mode: SizingMode
    min_size: int
    max_size: int

    def select_count(self, available: int) -> Optional[int]:
        """
        Number of closest candidates to commit, or None if the seed yields no cluster.

        Args:
            available: Candidate count within radius, seed included.
        """
        if available < self.min_size or self.max_size < self.min_size:
            return None
        count = min(available, self.max_size)
        if count < 1:
            return None
        return count

    def describe(self) -> str:
        if self.min_size == self.max_size:
            return f"{self.mode.value} (exactly {self.min_size})"
        return f"{self.mode.value} ({self.min_size}-{self.max_size})"


def resolve_sizing_policy(
    cluster_size: Optional[int] = None,
    min_cluster_size: Optional[int] = None,
    max_cluster_size: Optional[int] = None,
    precise_cluster_size: Optional[int] = None,
) -> SizingPolicy:
    """
    Pick the active sizing policy.

    Precedence: precise size, then min/max bounds, then the legacy single
    `cluster_size`, then the default range of 2-5 tickets.
    """
    if precise_cluster_size is not None:
        return SizingPolicy(SizingMode.PRECISE, precise_cluster_size, precise_cluster_size)

    if min_cluster_size is not None or max_cluster_size is not None:
        min_size = DEFAULT_MIN_SIZE if min_cluster_size is None else min_cluster_size
        if max_cluster_size is None:
            max_size = max(DEFAULT_MAX_SIZE, min_size)
        else:
            max_size = max_cluster_size
        return SizingPolicy(SizingMode.MIN_MAX, min_size, max_size)

    if cluster_size is not None:
        return SizingPolicy(SizingMode.LEGACY, cluster_size, cluster_size)

    return SizingPolicy(SizingMode.DEFAULT, DEFAULT_MIN_SIZE, DEFAULT_MAX_SIZE)
