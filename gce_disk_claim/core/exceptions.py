"""
GCE Disk Claim - Custom Exception Classes

This module defines all custom exceptions used in GCE Disk Claim.
Each exception carries enough context for an operator to find out what
state the disk was left in.
"""


class DiskClaimError(Exception):
    """
    Base exception for all GCE Disk Claim errors.

    All custom exceptions inherit from this, making it easy to catch
    any claim-specific error with a single except clause.
    """
    pass


class AuthenticationError(DiskClaimError):
    """
    Raised when no credentials can be obtained for the Compute API.
    """

    def __init__(self, message: str, fix: str = None):
        """
        Args:
            message: Error description
            fix: Suggested fix (e.g., attach a service account to the VM)
        """
        self.fix = fix
        full_message = f"{message}"
        if fix:
            full_message += f"\n\nFix: {fix}"
        super().__init__(full_message)


class ValidationError(DiskClaimError):
    """
    Raised when a required flag is missing or empty.

    Always raised before any metadata or Compute API call is made.
    """

    def __init__(self, flag: str, message: str, fix: str = None):
        """
        Args:
            flag: The command line flag that failed validation (e.g. '--disk')
            message: What failed
            fix: Suggested fix
        """
        self.flag = flag
        self.fix = fix

        full_message = f"Invalid flag {flag}: {message}"
        if fix:
            full_message += f"\n\nFix: {fix}"

        super().__init__(full_message)


class DiskNotFoundError(DiskClaimError):
    """
    Raised when the disk to claim doesn't exist.
    """

    def __init__(self, disk_name: str, zone: str, project: str):
        """
        Args:
            disk_name: Name of the disk that wasn't found
            zone: Zone where we looked
            project: Project where we looked
        """
        self.disk_name = disk_name
        self.zone = zone
        self.project = project

        message = f"Disk '{disk_name}' not found in zone '{zone}' (project: {project})"
        message += f"\n\nList disks in this zone:"
        message += f"\n  gcloud compute disks list --zones={zone} --project={project}"
        super().__init__(message)


class TransportError(DiskClaimError):
    """
    Raised when a metadata or Compute API call fails.

    Never retried. The original exception is chained as __cause__.
    """

    def __init__(self, step: str, cause: Exception):
        """
        Args:
            step: What we were doing (e.g., "list instances in us-central1-a")
            cause: The underlying exception
        """
        self.step = step
        self.cause = cause

        message = f"Failed to {step}: {cause}"
        super().__init__(message)


class OperationFailedError(DiskClaimError):
    """
    Raised when a GCE operation finishes with an error payload.
    """

    def __init__(self, operation_name: str, reason: str, error: dict = None):
        """
        Args:
            operation_name: GCE name of the operation (e.g., 'operation-1697...')
            reason: Why it failed
            error: The raw error payload of the operation, unparsed
        """
        self.operation_name = operation_name
        self.reason = reason
        self.error = error

        message = f"Operation '{operation_name}' failed: {reason}"
        message += f"\n\nInspect it with:"
        message += f"\n  gcloud compute operations describe {operation_name}"
        super().__init__(message)


class OperationTimeoutError(DiskClaimError):
    """
    Raised when an operation is still pending after the configured max wait.
    """

    def __init__(self, operation_name: str, waited: float):
        """
        Args:
            operation_name: GCE name of the operation
            waited: Seconds spent waiting before giving up
        """
        self.operation_name = operation_name
        self.waited = waited

        message = f"Operation '{operation_name}' did not finish after {waited:.0f}s"
        super().__init__(message)
