"""
Per-cluster metrics and overall clustering statistics.
"""
from collections import Counter
from typing import List, Sequence

import pandas as pd

from ticketcluster.core_types import CenterPoint, Cluster, ClusteringResult, Priority, TicketT
from .distance import haversine_km


def compute_center_point(tickets: Sequence[TicketT]) -> CenterPoint:
    """Arithmetic mean of member coordinates (not a spherical centroid)."""
    n = len(tickets)
    return CenterPoint(
        lat=sum(t.lat for t in tickets) / n,
        lng=sum(t.lng for t in tickets) / n,
    )


def build_cluster(cluster_id: str, tickets: Sequence[TicketT]) -> Cluster[TicketT]:
    """Create a cluster record with its center point and spread metrics."""
    center = compute_center_point(tickets)
    distances: List[float] = [
        haversine_km(center.lat, center.lng, t.lat, t.lng) for t in tickets
    ]
    return Cluster(
        cluster_id=cluster_id,
        tickets=list(tickets),
        center_point=center,
        max_distance_km=round(max(distances), 2),
        total_distance_km=round(sum(distances), 2),
    )


def clustering_efficiency(tickets_clustered: int, total_tickets: int) -> float:
    """Percentage of input tickets absorbed into clusters, one decimal place."""
    if total_tickets == 0:
        return 0.0
    return round(tickets_clustered / total_tickets * 100, 1)


def _priority_label(ticket) -> str:
    priority = getattr(ticket, 'priority', None)
    return priority.value if isinstance(priority, Priority) else priority


def summarize_clusters(result: ClusteringResult) -> pd.DataFrame:
    """
    Tabulate per-cluster metrics for reporting.

    Returns:
        DataFrame with one row per cluster, in commit order.
    """
    columns = [
        'Cluster_ID', 'Seed_Ticket', 'Num_Tickets', 'Ticket_IDs',
        'Center_Latitude', 'Center_Longitude', 'Max_Distance_Km', 'Total_Distance_Km',
    ] + [f'{p.value}_Tickets' for p in Priority]

    rows = []
    for cluster in result.clusters:
        counts = Counter(_priority_label(t) for t in cluster.tickets)
        row = {
            'Cluster_ID': cluster.cluster_id,
            'Seed_Ticket': cluster.seed.id,
            'Num_Tickets': cluster.size,
            'Ticket_IDs': ', '.join(str(t.id) for t in cluster.tickets),
            'Center_Latitude': cluster.center_point.lat,
            'Center_Longitude': cluster.center_point.lng,
            'Max_Distance_Km': cluster.max_distance_km,
            'Total_Distance_Km': cluster.total_distance_km,
        }
        for p in Priority:
            row[f'{p.value}_Tickets'] = counts.get(p.value, 0)
        rows.append(row)
    return pd.DataFrame(rows, columns=columns)
