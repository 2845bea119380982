"""
clustering module

Greedy geographic clustering of tickets plus the supporting distance, priority,
sizing, aggregation, nearby-search and validation helpers.
"""

from .distance import (
    EARTH_RADIUS_KM,
    haversine_km,
    haversine_km_from,
)

from .priority import (
    PRIORITY_RANK,
    priority_rank,
    rank_tickets,
)

from .sizing import (
    SizingMode,
    SizingPolicy,
    resolve_sizing_policy,
)

from .aggregation import (
    build_cluster,
    clustering_efficiency,
    compute_center_point,
    summarize_clusters,
)

from .greedy import (
    METHOD_NAME,
    attempt_cluster,
    auto_cluster_tickets,
    find_candidates,
)

from .nearby import find_nearby_tickets

from .validation import (
    ClusteringLimits,
    ClusteringRequest,
    InvalidParameters,
    ValidationError,
    validate_parameters,
    validate_request,
    validate_tickets,
)

__all__ = [
    'EARTH_RADIUS_KM',
    'haversine_km',
    'haversine_km_from',
    'PRIORITY_RANK',
    'priority_rank',
    'rank_tickets',
    'SizingMode',
    'SizingPolicy',
    'resolve_sizing_policy',
    'build_cluster',
    'clustering_efficiency',
    'compute_center_point',
    'summarize_clusters',
    'METHOD_NAME',
    'attempt_cluster',
    'auto_cluster_tickets',
    'find_candidates',
    'find_nearby_tickets',
    'ClusteringLimits',
    'ClusteringRequest',
    'InvalidParameters',
    'ValidationError',
    'validate_parameters',
    'validate_request',
    'validate_tickets',
]
