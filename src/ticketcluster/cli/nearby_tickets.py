"""
Command-line tool: list tickets within a radius of one target ticket.
"""
import argparse
import json
import logging
from pathlib import Path

from ticketcluster.clustering import InvalidParameters, find_nearby_tickets
from ticketcluster.config.parameters import Parameters
from ticketcluster.utils.data_processing import load_tickets
from ticketcluster.utils.logging import setup_logging


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        description="Find tickets near a target ticket"
    )
    p.add_argument("--config", type=str, help="Path to custom config file")
    p.add_argument("--ticket-file", type=str, help="Ticket file (CSV or JSON)")
    p.add_argument("--target", required=True, help="Id of the target ticket")
    p.add_argument("--radius-km", type=float, help="Search radius in km")
    p.add_argument(
        "--suggestion-size",
        type=int,
        help="Tickets in the suggested cluster, target included",
    )
    p.add_argument("--output", type=str, help="Write the search result as JSON")
    p.add_argument("--verbose", action="store_true", help="Enable verbose output")
    return p


def main(argv=None) -> None:
    parser = _build_parser()
    args = parser.parse_args(argv)
    setup_logging(verbose=args.verbose)
    logger = logging.getLogger(__name__)

    params = Parameters.from_yaml(args.config) if args.config else Parameters.from_yaml()
    ticket_file = args.ticket_file or params.ticket_file
    radius_km = args.radius_km if args.radius_km is not None else params.radius_km
    suggestion_size = (
        args.suggestion_size if args.suggestion_size is not None
        else params.nearby_suggestion_size
    )

    try:
        tickets = load_tickets(ticket_file, location_field=params.jira_location_field)
    except (FileNotFoundError, ValueError) as e:
        parser.error(str(e))

    target = next((t for t in tickets if t.id == args.target), None)
    if target is None:
        parser.error(f"Target ticket not found: {args.target}")

    try:
        result = find_nearby_tickets(target, tickets, radius_km, suggestion_size=suggestion_size)
    except InvalidParameters as e:
        parser.error(str(e))

    print(f"\nTickets within {radius_km:g} km of {target.id}: {result.count}")
    for match in result.nearby_tickets:
        marker = "*" if match.ticket.id == target.id else " "
        priority = getattr(match.ticket, "priority", None) or "-"
        print(f" {marker} {match.ticket.id:<12} {match.distance_km:>8.2f} km  {priority}")
    if result.suggested_cluster:
        ids = ", ".join(t.id for t in result.suggested_cluster)
        print(f"\nSuggested cluster: {ids}")

    if args.output:
        output = Path(args.output)
        output.parent.mkdir(parents=True, exist_ok=True)
        with open(output, "w") as f:
            json.dump(result.to_dict(), f, indent=2)
        logger.info(f"Saved nearby search to {output}")


if __name__ == "__main__":
    main()
