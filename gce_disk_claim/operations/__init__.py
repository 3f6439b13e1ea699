"""
GCE Disk Claim - Operations Module

Mutating Compute API calls and the waiter for the operations they start.

Usage:
    from gce_disk_claim.operations import (
        DetachDiskOperation,
        AttachDiskOperation,
        OperationWaiter
    )

    detach = DetachDiskOperation(compute, project, zone, logger)
    result = detach.execute(vm_name='old-host', device_name='data-1')

    OperationWaiter(compute, project, zone).wait(result.operation_id)
"""

from gce_disk_claim.operations.base import (
    BaseOperation,
    OperationResult,
    TRANSPORT_ERRORS,
    execute_request
)
from gce_disk_claim.operations.attach_disk import AttachDiskOperation
from gce_disk_claim.operations.detach_disk import DetachDiskOperation
from gce_disk_claim.operations.wait import OperationWaiter

__all__ = [
    # Base classes
    'BaseOperation',
    'OperationResult',
    'TRANSPORT_ERRORS',
    'execute_request',

    # Operations
    'AttachDiskOperation',
    'DetachDiskOperation',
    'OperationWaiter',
]
