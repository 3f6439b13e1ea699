"""
GCE Disk Claim - Main Entry Point

Usage:
    from gce_disk_claim.main import claim_disk
    from gce_disk_claim.core.config import ClaimOptions

    result = claim_disk(ClaimOptions(disk_name='data-1'))
"""

import time
from typing import Optional

from gce_disk_claim.core.auth import AuthManager
from gce_disk_claim.core.config import ClaimOptions, create_claim_config, validate_options
from gce_disk_claim.core.exceptions import DiskClaimError
from gce_disk_claim.core.metadata import MetadataReader
from gce_disk_claim.orchestration import ClaimOrchestrator, ClaimResult
from gce_disk_claim.utils.logger import setup_logging, print_header


def claim_disk(options: ClaimOptions, compute=None, metadata: MetadataReader = None,
               sleep=time.sleep) -> Optional[ClaimResult]:
    """
    Claim a disk for the instance this runs on.

    This will:
    1. Validate the options (no network calls before this passes)
    2. Read project, zone and instance name from the metadata server
    3. Check the disk exists
    4. Detach it from its current holder, if that is another instance
    5. Attach it to this instance

    Errors are not recovered from: the first one stops the run and is
    logged with its full traceback.

    Args:
        options: Claim options (disk name, wait behavior, ...)
        compute: Compute API client (built from default credentials if None)
        metadata: MetadataReader (created if None)
        sleep: Sleep callable used between operation polls

    Returns:
        ClaimResult on success, None on failure

    Example:
        >>> claim_disk(ClaimOptions(disk_name='data-1'))
        ClaimResult(disk_name='data-1', ...)
    """

    logger = setup_logging(
        level=options.log_level,
        log_file=options.log_file,
        debug=options.log_level.upper() == 'DEBUG'
    )

    print_header(logger, "GCE Disk Claim")

    try:
        validate_options(options)

        logger.info(f"Disk: {options.disk_name}")
        logger.info("")

        logger.info("Reading instance metadata...")
        metadata = metadata or MetadataReader(logger=logger)
        identity = metadata.identity()
        logger.info(f"  Project: {identity.project}")
        logger.info(f"  Zone: {identity.zone}")
        logger.info(f"  Instance: {identity.instance_name}")

        config = create_claim_config(options, identity)

        if compute is None:
            compute = AuthManager().get_client()

        logger.info("")
        logger.info("Claiming disk:")
        orchestrator = ClaimOrchestrator(
            compute=compute,
            config=config,
            logger=logger,
            sleep=sleep
        )
        result = orchestrator.execute()

    except DiskClaimError:
        logger.info("")
        logger.exception("Disk claim failed")
        return None

    except Exception:
        logger.info("")
        logger.exception("Unexpected error")
        return None

    logger.info("")
    if result.waited:
        logger.info(f"[OK] Disk {result.disk_name} attached to {result.instance_name}")
    else:
        logger.info(f"[OK] Disk {result.disk_name} claim submitted for {result.instance_name}")
        logger.info("     Operations were not waited on; the disk may not be usable yet.")

    return result
