"""
GCE Disk Claim - Detach Disk Operation

Detaches a disk from the instance currently holding it.
"""

from gce_disk_claim.operations.base import BaseOperation, OperationResult
from gce_disk_claim.utils.logger import log_api_call


class DetachDiskOperation(BaseOperation):
    """
    Detaches a disk from a VM.

    Returns as soon as the API accepts the request; use OperationWaiter
    to wait for the detach to finish.
    """

    @property
    def name(self) -> str:
        """Display name for this operation."""
        return "Detach Disk"

    def execute(self, vm_name: str, device_name: str) -> OperationResult:
        """
        Detach a disk from VM.

        Args:
            vm_name: Name of the VM holding the disk
            device_name: Device name of the disk on that VM

        Returns:
            OperationResult for the detach operation

        Raises:
            TransportError: If the API call fails
        """

        self._log_debug(f"Executing {self.name}: {device_name} from {vm_name}")
        log_api_call(self.logger, 'instances.detachDisk',
                     project=self.project, zone=self.zone,
                     instance=vm_name, deviceName=device_name)

        request = self.compute.instances().detachDisk(
            project=self.project,
            zone=self.zone,
            instance=vm_name,
            deviceName=device_name
        )

        result = self._submit(
            request,
            instance_name=vm_name,
            step=f"detach disk '{device_name}' from instance '{vm_name}'"
        )
        self._log_debug(f"Detach submitted: {result.operation_id}")
        return result
