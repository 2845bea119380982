import time
from typing import Callable, Optional, Sequence

from ticketcluster.config.parameters import Parameters
from ticketcluster.core_types import ClusteringResult
from ticketcluster.clustering import (
    ClusteringLimits,
    ClusteringRequest,
    auto_cluster_tickets,
    validate_request,
)


def build_request(tickets: Sequence, params: Parameters) -> ClusteringRequest:
    """
    Library facade to combine loaded tickets with configured parameters.
    """
    return ClusteringRequest(
        tickets=list(tickets),
        radius_km=params.radius_km,
        cluster_size=params.cluster_size,
        min_cluster_size=params.min_cluster_size,
        max_cluster_size=params.max_cluster_size,
        precise_cluster_size=params.precise_cluster_size,
        prioritize_high_priority=params.prioritize_high_priority,
    )


def run_clustering(
    request: ClusteringRequest,
    limits: Optional[ClusteringLimits] = None,
    validate: bool = True,
    verbose: bool = False,
    clock: Callable[[], float] = time.perf_counter,
) -> ClusteringResult:
    """
    Validate a request and run the greedy clustering pass.
    Raises ValidationError (or InvalidParameters) before any clustering happens.
    """
    if validate:
        validate_request(request, limits)

    result = auto_cluster_tickets(
        request.tickets,
        request.radius_km,
        cluster_size=request.cluster_size,
        min_cluster_size=request.min_cluster_size,
        max_cluster_size=request.max_cluster_size,
        precise_cluster_size=request.precise_cluster_size,
        prioritize_high_priority=request.prioritize_high_priority,
        clock=clock,
    )

    # Console output
    print("\nClustering Results:")
    print(f"Clusters: {result.total_clusters}")
    print(f"Tickets Clustered: {result.total_tickets_clustered}/{len(request.tickets)}")
    print(f"Efficiency: {result.clustering_efficiency:.1f}%")
    if verbose:
        for cluster in result.clusters:
            ids = ', '.join(str(t.id) for t in cluster.tickets)
            print(f"  {cluster.cluster_id}: {ids} (max spread {cluster.max_distance_km:.2f} km)")
        if result.unclustered_tickets:
            ids = ', '.join(str(t.id) for t in result.unclustered_tickets)
            print(f"  Unclustered: {ids}")

    return result
