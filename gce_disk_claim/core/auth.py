"""
GCE Disk Claim - Authentication Manager

This module handles Google Cloud authentication and Compute API client creation.
On a GCE instance, Application Default Credentials resolve to the instance's
service account tokens served by the metadata server.
"""

import google.auth
from google.auth.exceptions import DefaultCredentialsError
from googleapiclient import discovery
import googleapiclient.http
import google_auth_httplib2
import httplib2

from gce_disk_claim.core.exceptions import AuthenticationError
from gce_disk_claim.core.config import VERSION

COMPUTE_SCOPES = ['https://www.googleapis.com/auth/compute']


class AuthManager:
    """
    Manages Google Cloud authentication and API client creation.

    Usage:
        auth = AuthManager()
        compute = auth.get_client()
    """

    def __init__(self, scopes=None):
        """Initialize the authentication manager."""
        self.scopes = scopes or COMPUTE_SCOPES
        self._credentials = None
        self._compute = None

    def get_credentials(self):
        """
        Get Google Cloud credentials.

        Unlike user credentials, instance credentials start out without a
        token and are refreshed lazily on the first request, so they are
        not checked for validity here.

        Returns:
            google.auth.credentials.Credentials

        Raises:
            AuthenticationError: If no credentials are available
        """

        try:
            credentials, _ = google.auth.default(scopes=self.scopes)
            return credentials

        except DefaultCredentialsError as e:
            raise AuthenticationError(
                f"No credentials found: {e}",
                fix="Run on a GCE instance with a service account attached"
            ) from e

    def get_client(self):
        """
        Get authenticated Google Compute Engine API client.

        Returns:
            compute_client: Authenticated GCP Compute API client

        Raises:
            AuthenticationError: If authentication fails
        """

        if not self._credentials:
            self._credentials = self.get_credentials()

        if not self._compute:
            try:
                def _request_builder(http, *args, **kwargs):
                    """Inject User-Agent header for usage tracking."""
                    headers = kwargs.setdefault('headers', {})
                    headers['user-agent'] = f'gce-disk-claim-{VERSION}'
                    auth_http = google_auth_httplib2.AuthorizedHttp(
                        self._credentials,
                        http=httplib2.Http()
                    )
                    return googleapiclient.http.HttpRequest(auth_http, *args, **kwargs)

                self._compute = discovery.build(
                    'compute',
                    'v1',
                    credentials=self._credentials,
                    cache_discovery=False,
                    requestBuilder=_request_builder
                )
            except Exception as e:
                raise AuthenticationError(
                    f"Failed to create GCP API client: {str(e)}"
                ) from e

        return self._compute
