"""
GCE Disk Claim - Base Operation

This module provides the base class for the mutating operations.
Each operation issues ONE Compute API call and hands back the GCE
operation it started. There is no rollback: a failed step is reported
and the run stops.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional, Dict, Any

import httplib2
from googleapiclient.errors import HttpError

from gce_disk_claim.core.exceptions import TransportError
from gce_disk_claim.utils.logger import log_api_response

# Anything the API client can raise when a request doesn't go through
TRANSPORT_ERRORS = (HttpError, httplib2.HttpLib2Error, OSError)


def execute_request(request, step: str, logger=None):
    """
    Execute an API request, wrapping failures with context.

    Args:
        request: googleapiclient HttpRequest (anything with .execute())
        step: Description of the step, used in the error message
        logger: Optional logger for debug output

    Returns:
        dict: The API response

    Raises:
        TransportError: If the request fails
    """
    try:
        response = request.execute()
    except TRANSPORT_ERRORS as e:
        raise TransportError(step, e) from e

    log_api_response(logger, response)
    return response


@dataclass
class OperationResult:
    """
    A GCE operation started by one of our calls.

    Attributes:
        operation_name: Name of the step (for display)
        instance_name: Instance the disk was detached from / attached to
        operation_id: GCE name of the zone operation
        status: Last known status (PENDING, RUNNING, DONE)
        error: Error payload of the operation, if any
    """
    operation_name: str
    instance_name: str
    operation_id: str
    status: str = 'PENDING'
    error: Optional[Dict[str, Any]] = None

    @property
    def done(self) -> bool:
        return self.status == 'DONE'


class BaseOperation(ABC):
    """
    Base class for all operations.

    Every operation must:
    1. Inherit from this class
    2. Implement the execute() method (submit the API call)
    3. Implement the name property

    Example usage:
        operation = DetachDiskOperation(compute, project, zone, logger)
        result = operation.execute(vm_name='old-host', device_name='data-1')
        print(result.operation_id)
    """

    def __init__(self, compute, project: str, zone: str, logger=None):
        """
        Initialize operation.

        Args:
            compute: GCP compute client
            project: GCP project ID
            zone: GCP zone
            logger: Optional logger for debug output
        """
        self.compute = compute
        self.project = project
        self.zone = zone
        self.logger = logger

    @abstractmethod
    def execute(self, **kwargs) -> OperationResult:
        """
        Submit the operation.

        Returns:
            OperationResult for the GCE operation that was started

        Raises:
            TransportError: If the API call fails
        """
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        """
        Human-readable name of this operation.

        Used for display and logging.
        """
        pass

    def _log_debug(self, message: str):
        """Log debug message if logger available."""
        if self.logger:
            self.logger.debug(message)

    def _submit(self, request, instance_name: str, step: str) -> OperationResult:
        """Execute a mutating request and wrap the returned zone operation."""
        operation = execute_request(request, step, self.logger)

        return OperationResult(
            operation_name=self.name,
            instance_name=instance_name,
            operation_id=operation['name'],
            status=operation.get('status', 'PENDING'),
            error=operation.get('error')
        )
