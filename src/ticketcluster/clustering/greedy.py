"""
Greedy geographic clustering of field-service tickets.

Tickets are visited once each, in priority order, as potential cluster seeds.
A seed gathers every still-unassigned ticket within the search radius, keeps the
closest ones allowed by the active sizing policy, and commits them as a cluster.
Assignment is first-come-first-served: no ticket is ever reconsidered once taken.
"""
import logging
import time
from typing import Callable, FrozenSet, List, Optional, Sequence, Tuple

from ticketcluster.core_types import AlgorithmStats, Cluster, ClusteringResult, TicketT
from .aggregation import build_cluster, clustering_efficiency
from .distance import haversine_km
from .priority import rank_tickets
from .sizing import SizingPolicy, resolve_sizing_policy

logger = logging.getLogger(__name__)

METHOD_NAME = "Greedy Geographic Clustering"
CLUSTER_ID_PREFIX = "auto-cluster"


def find_candidates(
    seed_index: int,
    tickets: Sequence[TicketT],
    remaining: FrozenSet[int],
    radius_km: float,
    order: Sequence[int],
) -> List[Tuple[float, int]]:
    """
    Collect unassigned tickets within `radius_km` of the seed.

    Returns:
        (distance_km, position) pairs, seed first, the rest closest first.
        Equidistant candidates keep their relative position in `order`.
    """
    seed = tickets[seed_index]
    neighbours = []
    for idx in order:
        if idx == seed_index or idx not in remaining:
            continue
        ticket = tickets[idx]
        distance = haversine_km(seed.lat, seed.lng, ticket.lat, ticket.lng)
        if distance <= radius_km:
            neighbours.append((distance, idx))
    neighbours.sort(key=lambda pair: pair[0])
    return [(0.0, seed_index)] + neighbours


def attempt_cluster(
    seed_index: int,
    tickets: Sequence[TicketT],
    remaining: FrozenSet[int],
    radius_km: float,
    policy: SizingPolicy,
    order: Sequence[int],
) -> Optional[List[int]]:
    """Positions of the tickets the seed would claim, or None if it cannot form a cluster."""
    candidates = find_candidates(seed_index, tickets, remaining, radius_km, order)
    count = policy.select_count(len(candidates))
    if count is None:
        return None
    return [idx for _, idx in candidates[:count]]


def auto_cluster_tickets(
    tickets: Sequence[TicketT],
    radius_km: float,
    *,
    cluster_size: Optional[int] = None,
    min_cluster_size: Optional[int] = None,
    max_cluster_size: Optional[int] = None,
    precise_cluster_size: Optional[int] = None,
    prioritize_high_priority: bool = True,
    clock: Callable[[], float] = time.perf_counter,
) -> ClusteringResult[TicketT]:
    """
    Partition tickets into geographically coherent clusters.

    Args:
        tickets: Candidate tickets; each needs `id`, `lat` and `lng`, and may carry `priority`.
        radius_km: Maximum distance from a seed to any member of its cluster.
        cluster_size: Legacy single size (min = max = cluster_size).
        min_cluster_size: Lower bound for min/max sizing.
        max_cluster_size: Upper bound for min/max sizing.
        precise_cluster_size: Exact cluster size; takes precedence over all other sizes.
        prioritize_high_priority: Visit higher-priority tickets first as seeds.
        clock: Time source in seconds, used only for `execution_time_ms`.

    Returns:
        ClusteringResult whose clusters and unclustered tickets partition the input.
        Inputs are not validated; impossible constraints simply yield fewer clusters.
    """
    start_time = clock()
    policy = resolve_sizing_policy(
        cluster_size=cluster_size,
        min_cluster_size=min_cluster_size,
        max_cluster_size=max_cluster_size,
        precise_cluster_size=precise_cluster_size,
    )
    order = rank_tickets(tickets, enabled=prioritize_high_priority)
    logger.debug(
        f"Clustering {len(tickets)} tickets with radius={radius_km}km, "
        f"sizing={policy.describe()}, prioritized={prioritize_high_priority}"
    )

    clusters: List[Cluster[TicketT]] = []
    remaining: FrozenSet[int] = frozenset(range(len(tickets)))
    iterations = 0

    for seed_index in order:
        iterations += 1
        if seed_index not in remaining:
            continue

        selected = attempt_cluster(seed_index, tickets, remaining, radius_km, policy, order)
        if selected is None:
            continue

        remaining = remaining.difference(selected)
        cluster = build_cluster(
            f"{CLUSTER_ID_PREFIX}-{len(clusters) + 1}",
            [tickets[idx] for idx in selected]
        )
        clusters.append(cluster)
        logger.debug(
            f"Committed {cluster.cluster_id}: seed={cluster.seed.id}, "
            f"{cluster.size} tickets, max spread {cluster.max_distance_km}km"
        )

    unclustered = [ticket for idx, ticket in enumerate(tickets) if idx in remaining]
    total_clustered = sum(cluster.size for cluster in clusters)
    efficiency = clustering_efficiency(total_clustered, len(tickets))
    execution_time_ms = (clock() - start_time) * 1000

    logger.info(
        f"Created {len(clusters)} clusters covering {total_clustered}/{len(tickets)} "
        f"tickets ({efficiency}% efficiency)"
    )

    return ClusteringResult(
        clusters=clusters,
        unclustered_tickets=unclustered,
        total_clusters=len(clusters),
        total_tickets_clustered=total_clustered,
        clustering_efficiency=efficiency,
        algorithm_stats=AlgorithmStats(
            execution_time_ms=execution_time_ms,
            iterations=iterations,
            method=METHOD_NAME,
        ),
    )
