"""
Request validation performed before tickets reach the clustering engine.

The engine itself accepts anything numeric; these checks enforce the ranges
the scheduling tools accept and turn malformed payloads into clear errors.
"""
import math
from dataclasses import dataclass
from numbers import Integral, Real
from typing import Any, Dict, List, Mapping, Optional, Sequence

from ticketcluster.core_types import Ticket


class ValidationError(ValueError):
    """Raised when a clustering request payload is malformed."""


class InvalidParameters(ValidationError):
    """Raised when radius or sizing parameters are missing, out of range or contradictory."""


@dataclass(frozen=True)
class ClusteringLimits:
    """Accepted ranges for request parameters."""
    min_radius_km: float = 1.0
    max_radius_km: float = 500.0
    min_cluster_size: int = 2
    max_cluster_size: int = 10

    def __post_init__(self):
        if self.min_radius_km <= 0 or self.min_radius_km > self.max_radius_km:
            raise ValueError(
                f"Radius limits must satisfy 0 < min <= max. Got: "
                f"min_radius_km={self.min_radius_km}, max_radius_km={self.max_radius_km}"
            )
        if self.min_cluster_size < 1 or self.min_cluster_size > self.max_cluster_size:
            raise ValueError(
                f"Cluster size limits must satisfy 1 <= min <= max. Got: "
                f"min_cluster_size={self.min_cluster_size}, max_cluster_size={self.max_cluster_size}"
            )


@dataclass
class ClusteringRequest:
    """Everything needed for one clustering pass."""
    tickets: List[Any]
    radius_km: float
    cluster_size: Optional[int] = None
    min_cluster_size: Optional[int] = None
    max_cluster_size: Optional[int] = None
    precise_cluster_size: Optional[int] = None
    prioritize_high_priority: bool = True

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> 'ClusteringRequest':
        """Build a request from the JSON wire format, checking ticket structure."""
        if not isinstance(payload, Mapping):
            raise ValidationError("Request payload must be a JSON object")
        raw_tickets = payload.get('tickets')
        validate_tickets(raw_tickets)
        if 'radius_km' not in payload or payload['radius_km'] is None:
            raise InvalidParameters("radius_km is required")
        prioritize = payload.get('prioritize_high_priority')
        return cls(
            tickets=[Ticket.from_dict(t) for t in raw_tickets],
            radius_km=payload['radius_km'],
            cluster_size=payload.get('cluster_size'),
            min_cluster_size=payload.get('min_cluster_size'),
            max_cluster_size=payload.get('max_cluster_size'),
            precise_cluster_size=payload.get('precise_cluster_size'),
            prioritize_high_priority=True if prioritize is None else bool(prioritize),
        )

    def size_parameters(self) -> Dict[str, Optional[int]]:
        return {
            'cluster_size': self.cluster_size,
            'min_cluster_size': self.min_cluster_size,
            'max_cluster_size': self.max_cluster_size,
            'precise_cluster_size': self.precise_cluster_size,
        }


def _is_number(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool) and math.isfinite(value)


def _field(ticket: Any, name: str) -> Any:
    if isinstance(ticket, Mapping):
        return ticket.get(name)
    return getattr(ticket, name, None)


def validate_tickets(tickets: Optional[Sequence[Any]]) -> None:
    """Require a non-empty list of tickets, each with an id and numeric coordinates."""
    if tickets is None or isinstance(tickets, (str, bytes, Mapping)) or not isinstance(tickets, Sequence):
        raise ValidationError("tickets must be a list")
    if len(tickets) == 0:
        raise ValidationError("tickets must contain at least one ticket")
    for position, ticket in enumerate(tickets):
        ticket_id = _field(ticket, 'id')
        if ticket_id is None or ticket_id == '':
            raise ValidationError(f"Ticket at position {position} is missing an id")
        for name in ('lat', 'lng'):
            if not _is_number(_field(ticket, name)):
                raise ValidationError(
                    f"Ticket {ticket_id} must have a numeric {name}. Got: {_field(ticket, name)!r}"
                )


def _check_size(name: str, value: Optional[int], limits: ClusteringLimits) -> None:
    if value is None:
        return
    if isinstance(value, bool) or not isinstance(value, Integral):
        raise InvalidParameters(f"{name} must be an integer. Got: {value!r}")
    if value <= 0:
        raise InvalidParameters(f"{name} must be positive. Got: {value}")
    if not limits.min_cluster_size <= value <= limits.max_cluster_size:
        raise InvalidParameters(
            f"Invalid {name}: must be between {limits.min_cluster_size} "
            f"and {limits.max_cluster_size}. Got: {value}"
        )


def validate_parameters(
    radius_km: Any,
    cluster_size: Optional[int] = None,
    min_cluster_size: Optional[int] = None,
    max_cluster_size: Optional[int] = None,
    precise_cluster_size: Optional[int] = None,
    limits: Optional[ClusteringLimits] = None,
) -> None:
    """Check radius and sizing parameters against `limits`."""
    limits = limits or ClusteringLimits()

    if not _is_number(radius_km):
        raise InvalidParameters(f"radius_km must be a number. Got: {radius_km!r}")
    if radius_km <= 0:
        raise InvalidParameters(f"radius_km must be positive. Got: {radius_km}")
    if not limits.min_radius_km <= radius_km <= limits.max_radius_km:
        raise InvalidParameters(
            f"Invalid radius_km: must be between {limits.min_radius_km:g} "
            f"and {limits.max_radius_km:g}. Got: {radius_km}"
        )

    _check_size('precise_cluster_size', precise_cluster_size, limits)
    _check_size('min_cluster_size', min_cluster_size, limits)
    _check_size('max_cluster_size', max_cluster_size, limits)
    _check_size('cluster_size', cluster_size, limits)

    if (min_cluster_size is not None and max_cluster_size is not None
            and min_cluster_size > max_cluster_size):
        raise InvalidParameters(
            f"min_cluster_size must not exceed max_cluster_size. Got: "
            f"min_cluster_size={min_cluster_size}, max_cluster_size={max_cluster_size}"
        )


def validate_request(request: ClusteringRequest, limits: Optional[ClusteringLimits] = None) -> None:
    """Validate tickets and parameters of a request."""
    validate_tickets(request.tickets)
    validate_parameters(request.radius_km, limits=limits, **request.size_parameters())
