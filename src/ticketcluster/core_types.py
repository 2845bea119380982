"""
Core data types shared across the ticketcluster package.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Generic, List, Mapping, Optional, Protocol, TypeVar


class Priority(str, Enum):
    """Ticket priorities understood by the clustering engine."""
    CRITICAL = 'Critical'
    HIGH = 'High'
    MEDIUM = 'Medium'
    LOW = 'Low'


class TicketLike(Protocol):
    """Structural type for anything the clustering core can work on."""
    id: str
    lat: float
    lng: float


TicketT = TypeVar('TicketT', bound=TicketLike)

# Keys that map onto Ticket attributes; everything else is carried in `extra`.
_TICKET_FIELDS = ('id', 'lat', 'lng', 'priority')


@dataclass(frozen=True)
class Ticket:
    """A field-service ticket with a geographic location."""
    id: str
    lat: float
    lng: float
    priority: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict, compare=False, hash=False)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'Ticket':
        """Create a ticket from the wire format (`id`, `lat`, `lng`, `priority?`, ...)."""
        return cls(
            id=str(data['id']),
            lat=data['lat'],
            lng=data['lng'],
            priority=data.get('priority'),
            extra={k: v for k, v in data.items() if k not in _TICKET_FIELDS},
        )

    def to_dict(self) -> Dict[str, Any]:
        """Flatten back to the wire format, extra fields included."""
        data: Dict[str, Any] = {'id': self.id, 'lat': self.lat, 'lng': self.lng}
        if self.priority is not None:
            data['priority'] = self.priority
        data.update(self.extra)
        return data


def ticket_to_dict(ticket: Any) -> Dict[str, Any]:
    """Serialize any ticket-like record."""
    if hasattr(ticket, 'to_dict'):
        return ticket.to_dict()
    if isinstance(ticket, Mapping):
        return dict(ticket)
    return dict(vars(ticket))


@dataclass(frozen=True)
class CenterPoint:
    lat: float
    lng: float

    def to_dict(self) -> Dict[str, float]:
        return {'lat': self.lat, 'lng': self.lng}


@dataclass
class Cluster(Generic[TicketT]):
    """A committed group of tickets. `tickets[0]` is the seed."""
    cluster_id: str
    tickets: List[TicketT]
    center_point: CenterPoint
    max_distance_km: float
    total_distance_km: float

    @property
    def size(self) -> int:
        return len(self.tickets)

    @property
    def seed(self) -> TicketT:
        return self.tickets[0]

    def to_dict(self) -> Dict[str, Any]:
        return {
            'cluster_id': self.cluster_id,
            'tickets': [ticket_to_dict(t) for t in self.tickets],
            'center_point': self.center_point.to_dict(),
            'max_distance_km': self.max_distance_km,
            'total_distance_km': self.total_distance_km,
        }


@dataclass(frozen=True)
class AlgorithmStats:
    execution_time_ms: float
    iterations: int
    method: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            'execution_time_ms': self.execution_time_ms,
            'iterations': self.iterations,
            'method': self.method,
        }


@dataclass
class ClusteringResult(Generic[TicketT]):
    """Output of one clustering pass."""
    clusters: List[Cluster[TicketT]]
    unclustered_tickets: List[TicketT]
    total_clusters: int
    total_tickets_clustered: int
    clustering_efficiency: float
    algorithm_stats: AlgorithmStats

    def to_dict(self) -> Dict[str, Any]:
        return {
            'clusters': [c.to_dict() for c in self.clusters],
            'unclustered_tickets': [ticket_to_dict(t) for t in self.unclustered_tickets],
            'total_clusters': self.total_clusters,
            'total_tickets_clustered': self.total_tickets_clustered,
            'clustering_efficiency': self.clustering_efficiency,
            'algorithm_stats': self.algorithm_stats.to_dict(),
        }


@dataclass(frozen=True)
class NearbyTicket(Generic[TicketT]):
    ticket: TicketT
    distance_km: float

    def to_dict(self) -> Dict[str, Any]:
        data = ticket_to_dict(self.ticket)
        data['distance_km'] = self.distance_km
        return data


@dataclass
class NearbySearchResult(Generic[TicketT]):
    """Tickets found around a target, closest first."""
    target_ticket: TicketT
    radius_km: float
    nearby_tickets: List[NearbyTicket[TicketT]]
    suggested_cluster: Optional[List[TicketT]] = None

    @property
    def count(self) -> int:
        return len(self.nearby_tickets)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'target_ticket': ticket_to_dict(self.target_ticket),
            'radius_km': self.radius_km,
            'nearby_tickets': [n.to_dict() for n in self.nearby_tickets],
            'count': self.count,
            'suggested_cluster': (
                [ticket_to_dict(t) for t in self.suggested_cluster]
                if self.suggested_cluster is not None else None
            ),
        }
