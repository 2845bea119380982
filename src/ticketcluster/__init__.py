"""
ticketcluster: greedy geographic clustering of JIRA field-service tickets.

Typical high-level workflow
--------------------------
>>> from ticketcluster import load_tickets, auto_cluster_tickets
>>> tickets = load_tickets('sample_tickets.csv')
>>> result = auto_cluster_tickets(tickets, radius_km=20, min_cluster_size=2, max_cluster_size=4)
>>> [c.cluster_id for c in result.clusters]
"""

from .core_types import (
    AlgorithmStats,
    CenterPoint,
    Cluster,
    ClusteringResult,
    NearbySearchResult,
    NearbyTicket,
    Priority,
    Ticket,
)
from .clustering import (
    ClusteringLimits,
    ClusteringRequest,
    InvalidParameters,
    ValidationError,
    auto_cluster_tickets,
    find_nearby_tickets,
    haversine_km,
)
from .config.parameters import Parameters
from .pipeline.clustering_interface import build_request, run_clustering
from .utils.data_processing import load_tickets
from .utils.save_results import save_clustering_results

__all__ = [
    'AlgorithmStats',
    'CenterPoint',
    'Cluster',
    'ClusteringResult',
    'NearbySearchResult',
    'NearbyTicket',
    'Priority',
    'Ticket',
    'ClusteringLimits',
    'ClusteringRequest',
    'InvalidParameters',
    'ValidationError',
    'auto_cluster_tickets',
    'find_nearby_tickets',
    'haversine_km',
    'Parameters',
    'build_request',
    'run_clustering',
    'load_tickets',
    'save_clustering_results',
]
