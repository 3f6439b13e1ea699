"""
GCE Disk Claim - Operation Waiter

Blocks until a zone operation reaches DONE, polling on a fixed interval.
"""

import time
from typing import Optional

from gce_disk_claim.core.config import DEFAULT_POLL_INTERVAL
from gce_disk_claim.core.exceptions import OperationFailedError, OperationTimeoutError
from gce_disk_claim.operations.base import execute_request
from gce_disk_claim.utils.logger import log_api_call

DONE = 'DONE'


class OperationWaiter:
    """
    Polls a zone operation until it is done.

    - An operation carrying an error payload fails the wait right away.
    - A failing poll request is not retried.
    - Without max_wait the loop never gives up.

    Example:
        waiter = OperationWaiter(compute, project, zone, poll_interval=5)
        waiter.wait('operation-1697040000000-abc')
    """

    def __init__(self, compute, project: str, zone: str,
                 poll_interval: float = DEFAULT_POLL_INTERVAL,
                 max_wait: Optional[float] = None,
                 sleep=time.sleep, clock=time.monotonic, logger=None):
        """
        Args:
            compute: GCP compute client
            project: GCP project ID
            zone: GCP zone
            poll_interval: Seconds to sleep between polls
            max_wait: Give up after this many seconds (None: never)
            sleep: Callable used to sleep between polls
            clock: Callable returning a monotonic time in seconds
            logger: Optional logger
        """
        self.compute = compute
        self.project = project
        self.zone = zone
        self.poll_interval = poll_interval
        self.max_wait = max_wait
        self._sleep = sleep
        self._clock = clock
        self.logger = logger

    def wait(self, operation_name: str) -> dict:
        """
        Wait for an operation to finish.

        Args:
            operation_name: GCE name of the zone operation

        Returns:
            dict: The final operation resource

        Raises:
            OperationFailedError: If the operation reports an error
            OperationTimeoutError: If max_wait elapses first
            TransportError: If polling the operation fails
        """
        start_time = self._clock()

        operation = self._poll(operation_name)
        while not self._is_done(operation):
            waited = self._clock() - start_time
            if self.max_wait is not None and waited >= self.max_wait:
                raise OperationTimeoutError(operation_name, waited)

            self._sleep(self.poll_interval)
            operation = self._poll(operation_name)

        if self.logger:
            self.logger.debug(f"Operation {operation_name} done "
                              f"(took {self._clock() - start_time:.1f}s)")
        return operation

    def _poll(self, operation_name: str) -> dict:
        """Fetch the operation once, failing on an error payload."""
        log_api_call(self.logger, 'zoneOperations.get',
                     project=self.project, zone=self.zone, operation=operation_name)

        operation = execute_request(
            self.compute.zoneOperations().get(
                project=self.project,
                zone=self.zone,
                operation=operation_name
            ),
            step=f"get status of operation '{operation_name}'",
            logger=self.logger
        )

        if operation.get('error'):
            raise OperationFailedError(
                operation_name,
                "operation finished with an error",
                error=operation['error']
            )

        return operation

    @staticmethod
    def _is_done(operation: dict) -> bool:
        return operation.get('status') == DONE
