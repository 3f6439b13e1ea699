"""
GCE Disk Claim - Metadata Reader

Reads facts about the running instance from the GCE metadata server.
The metadata server is local and credential-free, so plain httplib2 is used.
"""

from dataclasses import dataclass

import httplib2

from gce_disk_claim.core.config import METADATA_URL
from gce_disk_claim.core.exceptions import TransportError

METADATA_HEADERS = {'Metadata-Flavor': 'Google'}


@dataclass(frozen=True)
class InstanceIdentity:
    """Who we are: the claiming instance."""
    project: str
    zone: str
    instance_name: str


class MetadataReader:
    """
    Fetches keys from the metadata server.

    Example:
        metadata = MetadataReader()
        identity = metadata.identity()
        print(identity.instance_name)
    """

    def __init__(self, http=None, base_url: str = METADATA_URL, timeout: int = 3, logger=None):
        """
        Args:
            http: httplib2.Http-like object (created if not provided)
            base_url: Metadata server root
            timeout: Socket timeout in seconds
            logger: Optional logger
        """
        self.http = http or httplib2.Http(timeout=timeout)
        self.base_url = base_url
        self.logger = logger

    def get(self, key: str) -> str:
        """
        Fetch one metadata key as a string.

        Args:
            key: Path under computeMetadata/v1 (e.g. 'project/project-id')

        Returns:
            str: The value, with surrounding whitespace stripped

        Raises:
            TransportError: If the request fails or doesn't return 200
        """
        url = self.base_url + key
        if self.logger:
            self.logger.debug(f"Metadata request: {url}")

        try:
            response, content = self.http.request(url, 'GET', headers=METADATA_HEADERS)
        except (httplib2.HttpLib2Error, OSError) as e:
            raise TransportError(f"read metadata key '{key}'", e) from e

        if response.status != 200:
            error = httplib2.HttpLib2Error(f"metadata server returned HTTP {response.status}")
            raise TransportError(f"read metadata key '{key}'", error)

        if isinstance(content, bytes):
            content = content.decode('utf-8')
        return content.strip()

    def project_id(self) -> str:
        """Project the instance runs in."""
        return self.get('project/project-id')

    def zone(self) -> str:
        """Zone short name (metadata returns projects/<number>/zones/<zone>)."""
        return self.get('instance/zone').split('/')[-1]

    def instance_name(self) -> str:
        """Short instance name (metadata returns the FQDN)."""
        return self.get('instance/hostname').split('.')[0]

    def identity(self) -> InstanceIdentity:
        """Read project, zone and instance name in one go."""
        return InstanceIdentity(
            project=self.project_id(),
            zone=self.zone(),
            instance_name=self.instance_name()
        )
