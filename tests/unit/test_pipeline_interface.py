import pytest

from ticketcluster.clustering import ClusteringLimits, InvalidParameters, ValidationError
from ticketcluster.config.parameters import Parameters
from ticketcluster.core_types import ClusteringResult, Ticket
from ticketcluster.pipeline.clustering_interface import build_request, run_clustering


def test_build_request_copies_parameters(mini_yaml):
    params = Parameters.from_yaml(mini_yaml)
    tickets = [Ticket(id='a', lat=0.0, lng=0.0)]
    request = build_request(tickets, params)

    assert request.tickets == tickets
    assert request.tickets is not tickets
    assert request.radius_km == 5
    assert request.min_cluster_size == 2
    assert request.max_cluster_size == 3
    assert request.precise_cluster_size is None
    assert request.prioritize_high_priority is True


def test_run_clustering_prints_summary(street_tickets, mini_yaml, capsys):
    params = Parameters.from_yaml(mini_yaml)
    request = build_request(street_tickets, params)
    result = run_clustering(request, limits=params.clustering_limits, verbose=True)

    assert isinstance(result, ClusteringResult)
    assert result.total_tickets_clustered == 9
    out = capsys.readouterr().out
    assert "Clusters: 3" in out
    assert "Tickets Clustered: 9/10" in out
    assert "Efficiency: 90.0%" in out
    assert "auto-cluster-1: 1, 2, 3" in out
    assert "Unclustered:" in out


def test_run_clustering_validates_before_clustering(street_tickets, mini_yaml):
    params = Parameters.from_yaml(mini_yaml)
    request = build_request(street_tickets, params)
    request.radius_km = 0.5

    with pytest.raises(InvalidParameters, match="between 1 and 500"):
        run_clustering(request, limits=params.clustering_limits)

    request.tickets = []
    with pytest.raises(ValidationError):
        run_clustering(request)


def test_run_clustering_without_validation(street_tickets, mini_yaml):
    params = Parameters.from_yaml(mini_yaml)
    request = build_request(street_tickets, params)
    # Below the accepted range, but the engine itself takes any radius
    request.radius_km = 0.5
    result = run_clustering(request, validate=False, clock=lambda: 0.0)
    assert result.algorithm_stats.execution_time_ms == 0.0


def test_run_clustering_custom_limits(street_tickets, mini_yaml):
    params = Parameters.from_yaml(mini_yaml)
    request = build_request(street_tickets, params)
    request.radius_km = 0.5
    result = run_clustering(request, limits=ClusteringLimits(min_radius_km=0.1))
    assert result.total_clusters > 0
