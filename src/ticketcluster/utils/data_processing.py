import json
import logging
import math
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import pandas as pd

from ticketcluster.core_types import Priority, Ticket

logger = logging.getLogger(__name__)

DEFAULT_LOCATION_FIELD = 'customfield_10840'

COLUMN_ALIASES = {
    'key': 'id',
    'ticket_id': 'id',
    'Ticket_ID': 'id',
    'latitude': 'lat',
    'Latitude': 'lat',
    'longitude': 'lng',
    'Longitude': 'lng',
    'lon': 'lng',
    'Priority': 'priority',
}

def data_dir() -> Path:
    return Path(__file__).resolve().parent.parent.parent.parent / "data"

def resolve_ticket_path(ticket_file: str | Path) -> Path:
    """Resolve a ticket file against the working directory, then the data directory."""
    path = Path(ticket_file)
    if path.exists():
        return path
    candidate = data_dir() / path
    if not path.is_absolute() and candidate.exists():
        return candidate
    raise FileNotFoundError(f"Ticket file not found: {path.resolve()}")

def load_tickets(ticket_file: str | Path, location_field: str = DEFAULT_LOCATION_FIELD) -> List[Ticket]:
    """
    Load tickets from a CSV file, a JSON ticket list or an exported JIRA search.

    Args:
        ticket_file: Path to a `.csv` or `.json` file.
        location_field: JIRA custom field holding issue coordinates.

    Returns:
        List of tickets in file order.
    """
    path = resolve_ticket_path(ticket_file)
    logger.info(f"Loading tickets from {path}")

    suffix = path.suffix.lower()
    if suffix == '.csv':
        tickets = _load_csv(path)
    elif suffix == '.json':
        with open(path, encoding='utf-8') as f:
            tickets = tickets_from_json(json.load(f), location_field)
    else:
        raise ValueError(f"Unsupported ticket file format: {path.suffix} (expected .csv or .json)")

    logger.info(f"Loaded {len(tickets)} tickets")
    return tickets

def _load_csv(path: Path) -> List[Ticket]:
    df = pd.read_csv(path, dtype={'id': str, 'key': str, 'ticket_id': str, 'Ticket_ID': str})
    df = df.rename(columns=COLUMN_ALIASES)

    missing = [c for c in ('id', 'lat', 'lng') if c not in df.columns]
    if missing:
        raise ValueError(f"Ticket file {path} is missing required columns: {', '.join(missing)}")

    # Empty cells become None so they are not mistaken for values
    df = df.astype(object).where(pd.notna(df), None)
    return _records_to_tickets(df.to_dict(orient='records'), source=str(path))

def _records_to_tickets(records: List[Mapping[str, Any]], source: str) -> List[Ticket]:
    """Build tickets, rejecting records without an id or coordinates."""
    tickets = []
    for position, record in enumerate(records):
        if not isinstance(record, Mapping):
            raise ValueError(f"Ticket at position {position} in {source} is not an object")
        missing = [
            name for name in ('id', 'lat', 'lng')
            if record.get(name) is None or record.get(name) == ''
        ]
        if missing:
            raise ValueError(
                f"Ticket at position {position} in {source} is missing {', '.join(missing)}"
            )
        tickets.append(Ticket.from_dict(record))
    return tickets

def tickets_from_json(data: Any, location_field: str = DEFAULT_LOCATION_FIELD) -> List[Ticket]:
    """Convert a decoded JSON document into tickets."""
    if isinstance(data, Mapping) and 'issues' in data:
        tickets = []
        for issue in data['issues']:
            ticket = jira_issue_to_ticket(issue, location_field)
            if ticket is not None:
                tickets.append(ticket)
        skipped = len(data['issues']) - len(tickets)
        if skipped:
            logger.warning(f"Skipped {skipped} JIRA issues without usable location data")
        return tickets

    if isinstance(data, Mapping) and 'tickets' in data:
        data = data['tickets']

    if not isinstance(data, list):
        raise ValueError("Expected a list of tickets, {'tickets': [...]} or {'issues': [...]}")
    return _records_to_tickets(data, source='ticket list')

def map_jira_priority(jira_priority: Optional[str]) -> str:
    """Map a JIRA priority name onto the four clustering priorities."""
    priority = (jira_priority or '').lower()

    if 'critical' in priority or 'highest' in priority:
        return Priority.CRITICAL.value
    elif 'high' in priority:
        return Priority.HIGH.value
    elif 'low' in priority:
        return Priority.LOW.value
    else:
        return Priority.MEDIUM.value

def _extract_location(issue: Mapping[str, Any], location_field: str) -> Optional[Dict[str, Any]]:
    location = (issue.get('fields') or {}).get(location_field)
    if not isinstance(location, Mapping):
        return None

    coordinates = location.get('coordinates')
    if not isinstance(coordinates, (list, tuple)) or len(coordinates) < 2:
        return None

    try:
        latitude, longitude = float(coordinates[0]), float(coordinates[1])
    except (TypeError, ValueError):
        return None
    if math.isnan(latitude) or math.isnan(longitude):
        return None

    address = location.get('displayName') or ", ".join(
        part for part in (
            f"{location.get('streetNumber', '')} {location.get('street', '')}".strip(),
            location.get('city'),
            location.get('country'),
        ) if part
    )
    return {'lat': latitude, 'lng': longitude, 'address': address}

def jira_issue_to_ticket(
    issue: Mapping[str, Any],
    location_field: str = DEFAULT_LOCATION_FIELD
) -> Optional[Ticket]:
    """
    Transform a JIRA issue (REST search format) into a ticket.

    Returns None when the issue has no usable coordinates.
    """
    key = issue.get('key')
    location = _extract_location(issue, location_field)
    if location is None:
        logger.warning(f"No valid location data found for ticket {key} in {location_field}")
        return None

    fields = issue.get('fields') or {}
    assignee = fields.get('assignee') or {}
    return Ticket(
        id=str(key),
        lat=location['lat'],
        lng=location['lng'],
        priority=map_jira_priority((fields.get('priority') or {}).get('name')),
        extra={
            'title': fields.get('summary', ''),
            'description': fields.get('description') or '',
            'status': (fields.get('status') or {}).get('name'),
            'assignee': assignee.get('displayName'),
            'created': fields.get('created'),
            'address': location['address'],
        },
    )
