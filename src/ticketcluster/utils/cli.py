from argparse import ArgumentParser, RawTextHelpFormatter
from typing import Dict, Any
from ticketcluster.config.parameters import Parameters
import sys
from ticketcluster.utils.logging import Colors

def print_parameter_help():
    """Display detailed help information about parameters"""
    help_text = f"""
{Colors.BOLD}Greedy Ticket Clustering Parameters{Colors.RESET}
{Colors.CYAN}═══════════════════════════════════{Colors.RESET}

{Colors.YELLOW}Core Parameters:{Colors.RESET}
  --radius-km FLOAT        Maximum distance between a cluster seed and its members
                           Default: Defined in config file
                           Example: --radius-km 25

  --no-priority            Visit tickets in file order instead of seeding
                           clusters from Critical/High tickets first
                           Default: priority seeding enabled

{Colors.YELLOW}Cluster Sizing (highest precedence first):{Colors.RESET}
  --precise-cluster-size INT
                           Every cluster has exactly this many tickets;
                           seeds that cannot gather enough are skipped
                           Example: --precise-cluster-size 3

  --min-cluster-size INT   Smallest acceptable cluster
  --max-cluster-size INT   Largest cluster (closest tickets are kept)
                           Example: --min-cluster-size 2 --max-cluster-size 4

  --cluster-size INT       Legacy single size (same as precise)
                           Default when nothing is set: 2 to 5 tickets

{Colors.YELLOW}Input/Output:{Colors.RESET}
  --ticket-file STR        CSV, JSON ticket list or exported JIRA search
                           Relative paths also resolve against data/
                           Example: --ticket-file jira_export.json

  --config PATH            Path to custom config file
                           Default: src/ticketcluster/config/default_config.yaml
                           Example: --config my_config.yaml

  --format {{json,excel}}    Output file format
  --output PATH            Output file (default: results/clustering_results_<timestamp>)
  --map                    Also write an interactive HTML map

{Colors.YELLOW}Other Options:{Colors.RESET}
  --verbose               Enable verbose output
                           Default: False
                           Example: --verbose

{Colors.CYAN}Examples:{Colors.RESET}
  # Use custom config file
  ticketcluster --config my_config.yaml

  # Exactly three jobs per engineer within 15 km
  ticketcluster --radius-km 15 --precise-cluster-size 3

  # Between two and four jobs, ignore priorities, write Excel and a map
  ticketcluster --min-cluster-size 2 --max-cluster-size 4 --no-priority --format excel --map
"""
    print(help_text)
    sys.exit(0)

def parse_args() -> ArgumentParser:
    """Parse command line arguments for parameter overrides"""
    parser = ArgumentParser(
        description='Greedy Geographic Ticket Clustering',
        formatter_class=RawTextHelpFormatter
    )

    # Add help-params argument
    parser.add_argument(
        '--help-params',
        action='store_true',
        help='Show detailed parameter information and exit'
    )

    # Add arguments for each parameter that can be overridden
    parser.add_argument('--config', type=str, help='Path to custom config file')
    parser.add_argument('--ticket-file', type=str, help='Ticket file (CSV or JSON)')
    parser.add_argument('--radius-km', type=float, help='Clustering radius in km')
    parser.add_argument('--cluster-size', type=int, help='Legacy single cluster size')
    parser.add_argument('--min-cluster-size', type=int, help='Minimum tickets per cluster')
    parser.add_argument('--max-cluster-size', type=int, help='Maximum tickets per cluster')
    parser.add_argument('--precise-cluster-size', type=int, help='Exact tickets per cluster')
    parser.add_argument(
        '--no-priority',
        dest='prioritize_high_priority',
        action='store_false',
        default=None,
        help='Do not seed clusters from high-priority tickets first'
    )
    parser.add_argument(
        '--format',
        type=str,
        choices=['json', 'excel'],
        help='Output file format'
    )
    parser.add_argument('--output', type=str, help='Output file path')
    parser.add_argument('--map', action='store_true', help='Write an interactive cluster map')
    parser.add_argument('--verbose', action='store_true', help='Enable verbose output')

    return parser

def get_parameter_overrides(args) -> Dict[str, Any]:
    """Extract parameter overrides from command line arguments"""
    # Convert args to dictionary, excluding None values
    overrides = {k: v for k, v in vars(args).items() if v is not None}

    # Remove non-parameter arguments
    for key in ['config', 'verbose', 'help_params', 'output', 'map']:
        overrides.pop(key, None)

    # Convert dashed args to underscores
    overrides = {k.replace('-', '_'): v for k, v in overrides.items()}

    return overrides

def load_parameters(args) -> Parameters:
    """Load parameters with optional command line overrides"""
    # Load base parameters
    if args.config:
        params = Parameters.from_yaml(args.config)
    else:
        params = Parameters.from_yaml()

    # Get overrides from command line
    overrides = get_parameter_overrides(args)

    # A size given on the command line replaces every size from the config file
    size_keys = ['cluster_size', 'min_cluster_size', 'max_cluster_size', 'precise_cluster_size']
    if any(key in overrides for key in size_keys):
        for key in size_keys:
            overrides.setdefault(key, None)

    # Create new Parameters instance with remaining overrides
    if overrides:
        data = params.__dict__.copy()
        data.update(overrides)
        params = Parameters(**data)

    return params
