"""
GCE Disk Claim - Command Line Interface

Meant to run from a startup script on the instance that needs the disk.

Usage:
    gce-disk-claim claim --disk=<disk-name>
    gce-disk-claim claim-mount --disk=<disk-name> --path=<mount-path>
"""

import argparse
import json
import sys
from typing import Dict, Any

import yaml

from gce_disk_claim.core.config import ClaimOptions, DEFAULT_POLL_INTERVAL, VERSION
from gce_disk_claim.main import claim_disk


class OutputFormatter:
    """
    Handle output formatting similar to gcloud.

    Supports: json, yaml, table
    """

    @staticmethod
    def format_output(data: Dict[str, Any], format_type: str = 'table'):
        """Format output based on format type."""
        if format_type == 'json':
            return json.dumps(data, indent=2)
        elif format_type == 'yaml':
            return yaml.safe_dump(data, default_flow_style=False)
        elif format_type == 'table':
            return OutputFormatter._format_table(data)
        else:
            return str(data)

    @staticmethod
    def _format_table(data: Dict[str, Any]) -> str:
        """Format as table."""
        lines = []
        lines.append("┌─" + "─" * 50 + "─┐")
        for key, value in data.items():
            lines.append(f"│ {key:20} │ {str(value):27} │")
        lines.append("└─" + "─" * 50 + "─┘")
        return "\n".join(lines)


def create_parser() -> argparse.ArgumentParser:
    """
    Create argument parser.

    Returns:
        Configured ArgumentParser
    """

    parser = argparse.ArgumentParser(
        prog='gce-disk-claim',
        description='Move a persistent disk to the instance running this command',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
EXAMPLES
    Take over a disk and wait until it is attached:
        $ gce-disk-claim claim --disk=data-1

    Take over a disk without waiting, recording where it will be mounted:
        $ gce-disk-claim claim-mount --disk=data-1 --path=/mnt/data

NOTES
    Project, zone and instance name are read from the metadata server,
    so this only works on a GCE instance.
        """
    )

    parser.add_argument(
        '--version',
        action='version',
        version=f'gce-disk-claim v{VERSION}'
    )

    subparsers = parser.add_subparsers(
        dest='command',
        required=True,
        help='Available commands'
    )

    # CLAIM COMMAND
    claim_parser = subparsers.add_parser(
        'claim',
        help='Attach a disk to this instance and wait for it',
        description='Detach the disk from whichever instance holds it and attach it '
                    'to this instance, waiting for every operation to finish.'
    )
    _add_common_args(claim_parser)

    behavior = claim_parser.add_argument_group('BEHAVIOR FLAGS')
    behavior.add_argument(
        '--no-wait',
        dest='wait',
        action='store_false',
        default=True,
        help="Don't wait for the detach/attach operations to finish."
    )
    behavior.add_argument(
        '--always-reattach',
        dest='reattach',
        action='store_true',
        default=False,
        help='Detach and attach again even if this instance already holds the disk.'
    )

    # CLAIM-MOUNT COMMAND
    mount_parser = subparsers.add_parser(
        'claim-mount',
        help='Attach a disk to this instance without waiting, recording a mount path',
        description='Detach the disk from whichever instance holds it and attach it '
                    'to this instance without waiting. The mount path is recorded '
                    'for the mount step that follows.'
    )
    _add_common_args(mount_parser)

    mount_group = mount_parser.add_argument_group('MOUNT FLAGS')
    mount_group.add_argument(
        '--path',
        metavar='PATH',
        default='',
        help='Where the disk will be mounted inside the instance (required).'
    )

    behavior = mount_parser.add_argument_group('BEHAVIOR FLAGS')
    behavior.add_argument(
        '--wait',
        dest='wait',
        action='store_true',
        default=False,
        help='Wait for the detach/attach operations to finish.'
    )
    behavior.add_argument(
        '--skip-if-held',
        dest='reattach',
        action='store_false',
        default=True,
        help='Do nothing if this instance already holds the disk.'
    )

    return parser


def _add_common_args(parser: argparse.ArgumentParser):
    """Add arguments common to all commands."""

    required = parser.add_argument_group('REQUIRED FLAGS')
    required.add_argument(
        '--disk',
        metavar='DISK',
        default='',
        help='Name of the disk to attach to this instance.'
    )

    polling = parser.add_argument_group('POLLING FLAGS')
    polling.add_argument(
        '--poll-interval',
        type=float,
        metavar='SECONDS',
        default=DEFAULT_POLL_INTERVAL,
        help=f'Seconds between operation status checks. Default: {DEFAULT_POLL_INTERVAL}'
    )
    polling.add_argument(
        '--max-wait',
        type=float,
        metavar='SECONDS',
        help='Give up waiting on an operation after this many seconds. Default: wait forever'
    )

    output = parser.add_argument_group('OUTPUT FLAGS')
    output.add_argument(
        '--format',
        metavar='FORMAT',
        choices=['json', 'yaml', 'table', 'disable'],
        default='disable',
        help='Print a summary in this format. One of: json, yaml, table, disable. Default: disable'
    )
    output.add_argument(
        '--verbosity',
        metavar='VERBOSITY',
        choices=['debug', 'info', 'warning', 'error', 'critical'],
        default='info',
        help='Logging verbosity. One of: debug, info, warning, error, critical. Default: info'
    )
    output.add_argument(
        '--log-file',
        metavar='LOG_FILE',
        help='Write logs to this file.'
    )


def args_to_claim_options(args: argparse.Namespace) -> ClaimOptions:
    """Convert arguments to ClaimOptions."""
    options = ClaimOptions(
        disk_name=args.disk.strip(),
        wait_for_completion=args.wait,
        reattach_if_held=args.reattach,
        poll_interval=args.poll_interval,
        max_wait=args.max_wait,
        log_level=args.verbosity.upper(),
        log_file=args.log_file
    )

    if args.command == 'claim-mount':
        options.mount_path = args.path.strip()
        options.require_mount_path = True

    return options


def handle_claim(args: argparse.Namespace) -> int:
    """Handle claim and claim-mount commands."""

    options = args_to_claim_options(args)
    result = claim_disk(options)

    if result is None:
        return 1

    if args.format != 'disable':
        print(OutputFormatter.format_output(result.to_dict(), args.format))

    return 0


def main(argv=None):
    """Main CLI entry point."""

    parser = create_parser()
    args = parser.parse_args(argv)

    try:
        return handle_claim(args)

    except KeyboardInterrupt:
        print("\n\nOperation cancelled by user.", file=sys.stderr)
        return 130  # Standard exit code for SIGINT


if __name__ == '__main__':
    sys.exit(main())
