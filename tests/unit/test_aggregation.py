import pytest

from ticketcluster.core_types import AlgorithmStats, ClusteringResult, Priority, Ticket
from ticketcluster.clustering.aggregation import (
    build_cluster,
    clustering_efficiency,
    compute_center_point,
    summarize_clusters,
)


def test_center_point_is_arithmetic_mean():
    tickets = [
        Ticket(id='a', lat=10.0, lng=20.0),
        Ticket(id='b', lat=12.0, lng=24.0),
        Ticket(id='c', lat=14.0, lng=-2.0),
    ]
    center = compute_center_point(tickets)
    assert center.lat == pytest.approx(12.0)
    assert center.lng == pytest.approx(14.0)


def test_build_cluster_rounds_distances():
    tickets = [Ticket(id='a', lat=0.0, lng=0.0), Ticket(id='b', lat=0.0, lng=0.01)]
    cluster = build_cluster('auto-cluster-1', tickets)

    # Each member sits half of 1.11 km from the center
    assert cluster.max_distance_km == pytest.approx(0.56)
    assert cluster.total_distance_km == pytest.approx(1.11)
    assert cluster.max_distance_km == round(cluster.max_distance_km, 2)
    assert cluster.seed.id == 'a'
    assert cluster.size == 2


def test_build_cluster_single_point():
    cluster = build_cluster('x', [Ticket(id='a', lat=5.0, lng=5.0)])
    assert cluster.max_distance_km == 0.0
    assert cluster.total_distance_km == 0.0


@pytest.mark.parametrize("clustered, total, expected", [
    (0, 0, 0.0),
    (0, 5, 0.0),
    (5, 5, 100.0),
    (2, 3, 66.7),
    (1, 3, 33.3),
    (1, 8, 12.5),
])
def test_clustering_efficiency(clustered, total, expected):
    assert clustering_efficiency(clustered, total) == expected


def _result(clusters):
    return ClusteringResult(
        clusters=clusters,
        unclustered_tickets=[],
        total_clusters=len(clusters),
        total_tickets_clustered=sum(c.size for c in clusters),
        clustering_efficiency=100.0,
        algorithm_stats=AlgorithmStats(0.0, 0, 'test'),
    )


def test_summarize_clusters_counts_priorities():
    cluster = build_cluster('auto-cluster-1', [
        Ticket(id='1', lat=0.0, lng=0.0, priority='High'),
        Ticket(id='2', lat=0.0, lng=0.001, priority=Priority.HIGH),
        Ticket(id='3', lat=0.0, lng=0.002, priority='Low'),
        Ticket(id='4', lat=0.0, lng=0.003),
    ])
    df = summarize_clusters(_result([cluster]))

    assert len(df) == 1
    row = df.iloc[0]
    assert row['Cluster_ID'] == 'auto-cluster-1'
    assert row['Seed_Ticket'] == '1'
    assert row['Num_Tickets'] == 4
    assert row['Ticket_IDs'] == '1, 2, 3, 4'
    assert row['High_Tickets'] == 2
    assert row['Low_Tickets'] == 1
    assert row['Critical_Tickets'] == 0
    assert row['Medium_Tickets'] == 0


def test_summarize_clusters_empty_keeps_columns():
    df = summarize_clusters(_result([]))
    assert df.empty
    assert 'Cluster_ID' in df.columns
    assert 'Critical_Tickets' in df.columns
