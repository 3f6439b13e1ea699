"""
GCE Disk Claim - Disk Locator

Answers two questions about the disk before anything is changed:
does it exist, and which instance (if any) has it attached.
"""

from typing import Optional

from googleapiclient.errors import HttpError

from gce_disk_claim.core.exceptions import DiskNotFoundError, TransportError
from gce_disk_claim.operations.base import TRANSPORT_ERRORS, execute_request
from gce_disk_claim.utils.logger import log_api_call, log_api_response


class DiskLocator:
    """
    Read-only queries against the disks and instances of one zone.

    Example:
        locator = DiskLocator(compute, project, zone, logger)
        locator.check_disk_exists('data-1')
        holder = locator.find_attached_instance('data-1')
    """

    def __init__(self, compute, project: str, zone: str, logger=None):
        self.compute = compute
        self.project = project
        self.zone = zone
        self.logger = logger

    def check_disk_exists(self, disk_name: str) -> dict:
        """
        Get the disk resource.

        Returns:
            dict: The disk resource

        Raises:
            DiskNotFoundError: If the disk doesn't exist
            TransportError: If the API call fails for another reason
        """
        log_api_call(self.logger, 'disks.get',
                     project=self.project, zone=self.zone, disk=disk_name)

        step = f"get disk '{disk_name}'"
        try:
            disk = self.compute.disks().get(
                project=self.project,
                zone=self.zone,
                disk=disk_name
            ).execute()
        except HttpError as e:
            if e.resp.status == 404:
                raise DiskNotFoundError(disk_name, self.zone, self.project) from e
            raise TransportError(step, e) from e
        except TRANSPORT_ERRORS as e:
            raise TransportError(step, e) from e

        log_api_response(self.logger, disk)
        return disk

    def find_attached_instance(self, disk_name: str) -> Optional[str]:
        """
        Find the instance that has the disk attached.

        Instances are matched on an attached disk whose device name equals
        the disk name. The API allows only one holder; if several instances
        matched anyway, the first one listed is returned.

        Returns:
            str: Instance name, or None if the disk is not attached

        Raises:
            TransportError: If listing instances fails
        """
        instances = self.compute.instances()
        log_api_call(self.logger, 'instances.list', project=self.project, zone=self.zone)
        request = instances.list(project=self.project, zone=self.zone)

        while request is not None:
            response = execute_request(
                request,
                step=f"list instances in zone '{self.zone}'",
                logger=self.logger
            )

            for instance in response.get('items', []):
                for disk in instance.get('disks', []):
                    if disk.get('deviceName') == disk_name:
                        return instance['name']

            request = instances.list_next(previous_request=request, previous_response=response)

        return None
