import logging

import pytest

from ticketcluster.core_types import Ticket
from ticketcluster.clustering.distance import haversine_km
from ticketcluster.clustering.nearby import find_nearby_tickets
from ticketcluster.clustering.validation import InvalidParameters


@pytest.fixture
def london_tickets():
    return [
        Ticket(id='T1', lat=51.5074, lng=-0.1278, priority='Low'),
        Ticket(id='T2', lat=51.5080, lng=-0.1290, priority='High'),
        Ticket(id='T3', lat=51.5090, lng=-0.1260, priority='Medium'),
        Ticket(id='T4', lat=51.5100, lng=-0.1300),
        Ticket(id='MAN', lat=53.4808, lng=-2.2426),
    ]


def test_nearby_sorted_by_distance(london_tickets):
    target = london_tickets[0]
    result = find_nearby_tickets(target, london_tickets, 1)

    assert [m.ticket.id for m in result.nearby_tickets] == ['T1', 'T2', 'T3', 'T4']
    assert result.nearby_tickets[0].distance_km == 0.0
    assert result.count == 4
    for match in result.nearby_tickets[1:]:
        expected = haversine_km(target.lat, target.lng, match.ticket.lat, match.ticket.lng)
        assert match.distance_km == pytest.approx(round(expected, 2))


def test_suggested_cluster(london_tickets):
    result = find_nearby_tickets(london_tickets[0], london_tickets, 1)
    assert [t.id for t in result.suggested_cluster] == ['T1', 'T2', 'T3']

    result = find_nearby_tickets(london_tickets[0], london_tickets, 1, suggestion_size=2)
    assert [t.id for t in result.suggested_cluster] == ['T1', 'T2']


def test_no_neighbours_means_no_suggestion(london_tickets):
    target = london_tickets[-1]
    result = find_nearby_tickets(target, london_tickets, 10)

    assert [m.ticket.id for m in result.nearby_tickets] == ['MAN']
    assert result.suggested_cluster is None


def test_target_outside_the_list():
    target = Ticket(id='NEW', lat=0.0, lng=0.0)
    others = [Ticket(id='A', lat=0.0, lng=0.005)]
    result = find_nearby_tickets(target, others, 1)

    assert [m.ticket.id for m in result.nearby_tickets] == ['A']
    assert [t.id for t in result.suggested_cluster] == ['NEW', 'A']


def test_tickets_without_coordinates_are_skipped(london_tickets, caplog):
    broken = Ticket(id='BROKEN', lat=None, lng=None)
    with caplog.at_level(logging.WARNING):
        result = find_nearby_tickets(london_tickets[0], london_tickets + [broken], 1)

    assert 'BROKEN' not in [m.ticket.id for m in result.nearby_tickets]
    assert "BROKEN missing coordinates" in caplog.text


def test_target_without_coordinates_is_rejected(london_tickets):
    with pytest.raises(InvalidParameters, match="target_ticket must have"):
        find_nearby_tickets(Ticket(id='X', lat=None, lng=0.0), london_tickets, 5)


@pytest.mark.parametrize("radius", [0, -1, None])
def test_radius_must_be_positive(london_tickets, radius):
    with pytest.raises(InvalidParameters):
        find_nearby_tickets(london_tickets[0], london_tickets, radius)


def test_to_dict(london_tickets):
    data = find_nearby_tickets(london_tickets[0], london_tickets, 1).to_dict()

    assert data['target_ticket']['id'] == 'T1'
    assert data['radius_km'] == 1
    assert data['count'] == 4
    assert data['nearby_tickets'][0] == {
        'id': 'T1', 'lat': 51.5074, 'lng': -0.1278, 'priority': 'Low', 'distance_km': 0.0
    }
    assert [t['id'] for t in data['suggested_cluster']] == ['T1', 'T2', 'T3']
