"""GCE Disk Claim - Move a persistent disk to the instance that needs it.

Runs on a freshly started instance (usually from its startup script) and
makes sure a shared persistent disk ends up attached to it:

- Find the instance holding the disk, if any
- Detach it from that instance
- Attach it here, optionally waiting for every operation to finish

Example usage:
    >>> from gce_disk_claim import claim_disk, ClaimOptions
    >>> claim_disk(ClaimOptions(disk_name='data-1'))
"""

__version__ = "1.0.0"

from gce_disk_claim.core.config import ClaimOptions, ClaimConfig
from gce_disk_claim.main import claim_disk
from gce_disk_claim.orchestration import ClaimOrchestrator, ClaimResult

__all__ = [
    'ClaimOptions',
    'ClaimConfig',
    'ClaimOrchestrator',
    'ClaimResult',
    'claim_disk'
]
