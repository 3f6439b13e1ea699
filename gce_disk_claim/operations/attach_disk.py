"""
GCE Disk Claim - Attach Disk Operation

Attaches a disk to a VM under a device name equal to the disk name.
"""

from gce_disk_claim.core.config import disk_source_url
from gce_disk_claim.operations.base import BaseOperation, OperationResult
from gce_disk_claim.utils.logger import log_api_call


class AttachDiskOperation(BaseOperation):
    """
    Attaches a disk to a VM.

    The device name is the disk name, so the disk shows up inside the
    guest as /dev/disk/by-id/google-<disk-name>.
    """

    @property
    def name(self) -> str:
        """Display name for this operation."""
        return "Attach Disk"

    def execute(self, vm_name: str, disk_name: str) -> OperationResult:
        """
        Attach a disk to VM.

        Args:
            vm_name: Name of the VM
            disk_name: Name of the disk to attach

        Returns:
            OperationResult for the attach operation

        Raises:
            TransportError: If the API call fails
        """

        attach_body = {
            'deviceName': disk_name,
            'source': disk_source_url(self.project, self.zone, disk_name)
        }

        self._log_debug(f"Executing {self.name}: {disk_name} to {vm_name}")
        log_api_call(self.logger, 'instances.attachDisk',
                     project=self.project, zone=self.zone,
                     instance=vm_name, body=attach_body)

        request = self.compute.instances().attachDisk(
            project=self.project,
            zone=self.zone,
            instance=vm_name,
            body=attach_body
        )

        result = self._submit(
            request,
            instance_name=vm_name,
            step=f"attach disk '{disk_name}' to instance '{vm_name}'"
        )
        self._log_debug(f"Attach submitted: {result.operation_id}")
        return result
