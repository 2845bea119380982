"""
Radius search around a single target ticket.
"""
import logging
import math
from typing import List, Optional, Sequence

from ticketcluster.core_types import NearbySearchResult, NearbyTicket, TicketT
from .distance import haversine_km_from
from .validation import InvalidParameters

logger = logging.getLogger(__name__)


def _has_coordinates(ticket) -> bool:
    for name in ('lat', 'lng'):
        value = getattr(ticket, name, None)
        if value is None or isinstance(value, bool):
            return False
        try:
            if math.isnan(float(value)):
                return False
        except (TypeError, ValueError):
            return False
    return True


def find_nearby_tickets(
    target: TicketT,
    all_tickets: Sequence[TicketT],
    radius_km: float,
    suggestion_size: int = 3,
) -> NearbySearchResult[TicketT]:
    """
    Find tickets within `radius_km` of `target`, closest first.

    The target itself is reported at distance 0 when it is part of `all_tickets`.
    Tickets without usable coordinates are skipped. When at least one other ticket
    is nearby, a suggested cluster of the target plus its closest neighbours (up
    to `suggestion_size` tickets in total) is included.

    Raises:
        InvalidParameters: If the radius is not positive or the target has no coordinates.
    """
    if not _has_coordinates(target):
        raise InvalidParameters("target_ticket must have id, lat, and lng properties")
    if radius_km is None or radius_km <= 0:
        raise InvalidParameters(f"radius_km must be a positive number. Got: {radius_km}")

    located: List[TicketT] = []
    for ticket in all_tickets:
        if not _has_coordinates(ticket):
            logger.warning(f"Ticket {getattr(ticket, 'id', '?')} missing coordinates, skipping")
            continue
        located.append(ticket)

    distances = haversine_km_from(
        (target.lat, target.lng),
        [(t.lat, t.lng) for t in located]
    )

    matches: List[NearbyTicket[TicketT]] = []
    for ticket, distance in zip(located, distances):
        distance = 0.0 if ticket.id == target.id else float(distance)
        if distance <= radius_km:
            matches.append(NearbyTicket(ticket=ticket, distance_km=round(distance, 2)))
    matches.sort(key=lambda match: match.distance_km)

    others = [m.ticket for m in matches if m.ticket.id != target.id]
    suggestion: Optional[List[TicketT]] = None
    if others and suggestion_size > 1:
        suggestion = [target] + others[:suggestion_size - 1]

    logger.debug(f"Found {len(matches)} tickets within {radius_km}km of {target.id}")
    return NearbySearchResult(
        target_ticket=target,
        radius_km=radius_km,
        nearby_tickets=matches,
        suggested_cluster=suggestion,
    )
