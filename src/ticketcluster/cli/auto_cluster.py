"""
Command-line tool: cluster tickets from a file and save the results.
"""
import logging
import time
from pathlib import Path

from ticketcluster.clustering import ValidationError
from ticketcluster.pipeline.clustering_interface import build_request, run_clustering
from ticketcluster.utils.cli import load_parameters, parse_args, print_parameter_help
from ticketcluster.utils.data_processing import load_tickets
from ticketcluster.utils.logging import Colors, ProgressTracker, setup_logging
from ticketcluster.utils.save_results import save_clustering_results


def main(argv=None) -> None:
    """Run the ticket clustering pipeline."""
    parser = parse_args()
    args = parser.parse_args(argv)

    if args.help_params:
        print_parameter_help()

    setup_logging(verbose=args.verbose)
    logger = logging.getLogger(__name__)

    try:
        params = load_parameters(args)
    except (ValueError, FileNotFoundError) as e:
        parser.error(str(e))

    steps = ['Load Tickets', 'Cluster Tickets', 'Save Results']
    progress = ProgressTracker(steps)
    start_time = time.time()

    try:
        tickets = load_tickets(params.ticket_file, location_field=params.jira_location_field)
    except (FileNotFoundError, ValueError) as e:
        progress.pbar.close()
        parser.error(str(e))
    progress.advance(f"Loaded {Colors.BOLD}{len(tickets)}{Colors.RESET} tickets")

    request = build_request(tickets, params)
    try:
        result = run_clustering(
            request,
            limits=params.clustering_limits,
            verbose=args.verbose,
        )
    except ValidationError as e:
        logger.error(f"{progress.current_step} failed: {e}")
        progress.pbar.close()
        parser.error(str(e))
    progress.advance(
        f"Created {Colors.BOLD}{result.total_clusters}{Colors.RESET} clusters "
        f"({result.clustering_efficiency:.1f}% of tickets clustered)"
    )

    output = Path(args.output) if args.output else None
    results_path = save_clustering_results(
        result,
        params,
        filename=output,
        format=params.format,
        visualize=args.map,
    )
    progress.advance(
        f"Results saved to {results_path} "
        f"{Colors.GRAY}(execution time: {time.time() - start_time:.1f}s){Colors.RESET}"
    )
    progress.close()


if __name__ == "__main__":
    main()
