"""
GCE Disk Claim - Claim Orchestrator

Coordinates the claim workflow:
1. Checks the disk exists
2. Finds the instance currently holding it
3. Decides what to do (nothing, attach, or detach then attach)
4. Runs the steps in order, waiting for each one if configured to

Nothing is rolled back. A failure stops the run and is raised to the caller.
"""

import time
from dataclasses import dataclass, field
from typing import List, Optional

from gce_disk_claim.core.config import ClaimConfig
from gce_disk_claim.core.exceptions import DiskClaimError, OperationFailedError
from gce_disk_claim.operations import (
    AttachDiskOperation,
    DetachDiskOperation,
    OperationResult,
    OperationWaiter
)
from gce_disk_claim.orchestration.locator import DiskLocator
from gce_disk_claim.orchestration.state import StateTracker

ACTION_NOOP = 'noop'
ACTION_ATTACH = 'attach'
ACTION_DETACH_ATTACH = 'detach-attach'
ACTION_REATTACH = 'reattach'


def decide_action(holder: Optional[str], instance_name: str,
                  reattach_if_held: bool = False) -> str:
    """
    Pick the smallest set of changes that leaves the disk on instance_name.

    Args:
        holder: Instance currently holding the disk (None if unattached)
        instance_name: The claiming instance
        reattach_if_held: Detach and attach again even if we already hold it

    Returns:
        str: One of ACTION_NOOP, ACTION_ATTACH, ACTION_DETACH_ATTACH, ACTION_REATTACH
    """
    if not holder:
        return ACTION_ATTACH
    if holder != instance_name:
        return ACTION_DETACH_ATTACH
    if reattach_if_held:
        return ACTION_REATTACH
    return ACTION_NOOP


@dataclass
class ClaimResult:
    """
    What a claim run did.

    Attributes:
        disk_name: The claimed disk
        instance_name: The claiming instance
        previous_holder: Instance holding the disk before the run (or None)
        action: The action taken (see decide_action)
        operations: GCE operations started, in order
        mount_path: Mount path hint passed through for the guest mount step
        waited: Whether the operations were waited on
    """
    disk_name: str
    instance_name: str
    previous_holder: Optional[str]
    action: str
    operations: List[OperationResult] = field(default_factory=list)
    mount_path: Optional[str] = None
    waited: bool = True

    def to_dict(self) -> dict:
        """Plain dict for CLI output."""
        return {
            'diskName': self.disk_name,
            'instanceName': self.instance_name,
            'previousHolder': self.previous_holder or '',
            'action': self.action,
            'operations': ','.join(op.operation_id for op in self.operations),
            'mountPath': self.mount_path or '',
            'waited': self.waited
        }


class ClaimOrchestrator:
    """
    Orchestrates the claim workflow.

    Example:
        orchestrator = ClaimOrchestrator(
            compute=compute,
            config=config,
            logger=logger
        )
        result = orchestrator.execute()
    """

    def __init__(self, compute, config: ClaimConfig, logger=None,
                 sleep=time.sleep, clock=time.monotonic):
        """
        Initialize claim orchestrator.

        Args:
            compute: GCP compute client
            config: Immutable claim configuration
            logger: Optional logger
            sleep: Sleep callable used between operation polls
            clock: Monotonic clock used for max_wait
        """
        self.compute = compute
        self.config = config
        self.logger = logger

        self.locator = DiskLocator(compute, config.project, config.zone, logger)
        self.detach_disk = DetachDiskOperation(compute, config.project, config.zone, logger)
        self.attach_disk = AttachDiskOperation(compute, config.project, config.zone, logger)
        self.waiter = OperationWaiter(
            compute, config.project, config.zone,
            poll_interval=config.poll_interval,
            max_wait=config.max_wait,
            sleep=sleep,
            clock=clock,
            logger=logger
        )

        self.state_tracker = StateTracker()

    def _log_info(self, message: str):
        """Log info message."""
        if self.logger:
            self.logger.info(message)

    def _log_debug(self, message: str):
        """Log debug message."""
        if self.logger:
            self.logger.debug(message)

    def _log_critical(self, message: str):
        """Log critical message."""
        if self.logger:
            self.logger.critical(message)

    def execute(self) -> ClaimResult:
        """
        Execute the claim workflow.

        Returns:
            ClaimResult describing what was done

        Raises:
            DiskNotFoundError: If the disk doesn't exist (nothing changed)
            TransportError: If any API call fails
            OperationFailedError: If a detach/attach operation reports an error
            OperationTimeoutError: If max_wait elapses on an operation
        """
        config = self.config
        self._log_debug(f"Config: {config}")

        self._log_info(f"  Checking disk '{config.disk_name}' exists...")
        self.locator.check_disk_exists(config.disk_name)

        self._log_info("  Looking for an instance holding the disk...")
        holder = self.locator.find_attached_instance(config.disk_name)
        if holder:
            self._log_info(f"  Disk is attached to: {holder}")
        else:
            self._log_info("  Disk is not attached to any instance")

        action = decide_action(holder, config.instance_name, config.reattach_if_held)
        self._log_debug(f"Action: {action}")

        result = ClaimResult(
            disk_name=config.disk_name,
            instance_name=config.instance_name,
            previous_holder=holder,
            action=action,
            mount_path=config.mount_path,
            waited=config.wait_for_completion
        )

        if config.mount_path:
            self._log_info(f"  Mount path: {config.mount_path}")

        if action == ACTION_NOOP:
            self._log_info("  [OK] Disk already attached to this instance, nothing to do")
            return result

        if action in (ACTION_DETACH_ATTACH, ACTION_REATTACH):
            self._log_info(f"  Detaching disk from instance: {holder}...")
            self._run_step(result, self.detach_disk, holder, device_name=config.disk_name)

        self._log_info(f"  Attaching disk to this instance ({config.instance_name})...")
        try:
            self._run_step(result, self.attach_disk, config.instance_name, disk_name=config.disk_name)
        except DiskClaimError:
            if self.state_tracker.succeeded(self.detach_disk.name):
                if config.wait_for_completion:
                    self._log_critical(
                        f"Disk '{config.disk_name}' was detached from '{holder}' "
                        f"but could not be attached to '{config.instance_name}'. "
                        f"It is now attached to no instance."
                    )
                else:
                    self._log_critical(
                        f"Detach of disk '{config.disk_name}' from '{holder}' was submitted "
                        f"but the attach to '{config.instance_name}' failed. "
                        f"The disk may be attached to no instance."
                    )
            raise

        self._log_debug(self.state_tracker.get_summary())
        return result

    def _run_step(self, result: ClaimResult, operation, vm_name: str, **kwargs):
        """Submit one operation and, if configured, wait for it."""
        try:
            op_result = operation.execute(vm_name=vm_name, **kwargs)
            if op_result.error:
                raise OperationFailedError(
                    op_result.operation_id,
                    "operation was rejected with an error",
                    error=op_result.error
                )

            if self.config.wait_for_completion:
                self._log_info(f"    Waiting for {op_result.operation_id}...")
                final = self.waiter.wait(op_result.operation_id)
                op_result.status = final.get('status', op_result.status)

        except DiskClaimError as e:
            self.state_tracker.add_step(operation.name, vm_name, False, str(e))
            raise

        message = "done" if op_result.done else "submitted"
        self.state_tracker.add_step(operation.name, vm_name, True, message, op_result.operation_id)
        result.operations.append(op_result)
        self._log_info(f"  [OK] {operation.name} {message} ({vm_name})")
