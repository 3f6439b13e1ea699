"""
GCE Disk Claim - Configuration Management

This module manages configuration options for disk claim operations.

Two layers:
- ClaimOptions: what the operator asked for (from command line flags)
- ClaimConfig: immutable, fully resolved configuration handed to the
  orchestrator (options + identity of the claiming instance)
"""

from dataclasses import dataclass
from typing import Optional

from gce_disk_claim.core.exceptions import ValidationError

# Version for usage tracking
VERSION = '1.0.0'

COMPUTE_API_HOST = 'https://www.googleapis.com'
METADATA_URL = 'http://metadata.google.internal/computeMetadata/v1/'

DEFAULT_POLL_INTERVAL = 5  # seconds between operation polls


@dataclass
class ClaimOptions:
    """
    Options for a claim operation, as requested on the command line.

    The defaults describe the synchronous workflow: wait for every
    operation and leave the disk alone when we already hold it.

    Example:
        options = ClaimOptions(
            disk_name='data-1',
            wait_for_completion=False
        )
    """

    disk_name: str = ''

    # Mount path hint for the in-instance mount step (never changes the decision)
    mount_path: Optional[str] = None
    require_mount_path: bool = False

    # Behavior settings
    wait_for_completion: bool = True
    reattach_if_held: bool = False

    # Polling settings (in seconds)
    poll_interval: float = DEFAULT_POLL_INTERVAL
    max_wait: Optional[float] = None  # None: wait forever

    # Logging settings
    log_level: str = 'INFO'
    log_file: Optional[str] = None


@dataclass(frozen=True)
class ClaimConfig:
    """
    Immutable configuration for a single claim run.

    Example:
        config = ClaimConfig(
            disk_name='data-1',
            instance_name='new-host',
            project='my-project',
            zone='us-central1-a'
        )
    """

    disk_name: str
    instance_name: str
    project: str
    zone: str
    mount_path: Optional[str] = None
    wait_for_completion: bool = True
    reattach_if_held: bool = False
    poll_interval: float = DEFAULT_POLL_INTERVAL
    max_wait: Optional[float] = None


def disk_source_url(project: str, zone: str, disk_name: str) -> str:
    """Build the Compute API resource URL for a zonal disk."""
    return (f"{COMPUTE_API_HOST}/compute/v1/projects/{project}"
            f"/zones/{zone}/disks/{disk_name}")


def validate_options(options: ClaimOptions):
    """
    Check the options before anything touches the network.

    Args:
        options: Options to validate

    Raises:
        ValidationError: If a required value is missing or out of range
    """

    if not (options.disk_name or '').strip():
        raise ValidationError(
            '--disk',
            "disk name is required",
            fix="gce-disk-claim claim --disk=<disk-name>"
        )

    if options.require_mount_path and not (options.mount_path or '').strip():
        raise ValidationError(
            '--path',
            "mount path is required",
            fix="gce-disk-claim claim-mount --disk=<disk-name> --path=<mount-path>"
        )

    if options.poll_interval <= 0:
        raise ValidationError('--poll-interval', "must be greater than 0")

    if options.max_wait is not None and options.max_wait <= 0:
        raise ValidationError('--max-wait', "must be greater than 0")


def create_claim_options(**kwargs) -> ClaimOptions:
    """
    Create claim options with custom settings.

    Args:
        **kwargs: Any field from ClaimOptions

    Returns:
        ClaimOptions: Options object
    """
    return ClaimOptions(**kwargs)


def create_claim_config(options: ClaimOptions, identity) -> ClaimConfig:
    """
    Resolve options against the identity of the claiming instance.

    Args:
        options: Validated ClaimOptions
        identity: InstanceIdentity read from the metadata server

    Returns:
        ClaimConfig: Immutable configuration for the orchestrator
    """
    return ClaimConfig(
        disk_name=options.disk_name,
        instance_name=identity.instance_name,
        project=identity.project,
        zone=identity.zone,
        mount_path=options.mount_path,
        wait_for_completion=options.wait_for_completion,
        reattach_if_held=options.reattach_if_held,
        poll_interval=options.poll_interval,
        max_wait=options.max_wait
    )
