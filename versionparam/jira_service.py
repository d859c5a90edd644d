import logging
import os
from dataclasses import dataclass
from typing import Optional

import requests
from jira import JIRA, JIRAError

from .config import DEFAULT_JIRA_TIMEOUT
from .errors import ConnectivityError
from .models import VersionRecord

logger = logging.getLogger(__name__)


def _describe(error):
    if isinstance(error, JIRAError):
        return f"{error.status_code} - {error.text}"
    return str(error)


class JiraSession:
    """Read-only access to project versions through an authenticated client."""

    def __init__(self, jira_client):
        self.jira_client = jira_client

    def fetch_versions(self, project_key):
        """
        Fetches every version of a Jira project.

        Returns:
            list: VersionRecord objects in the order Jira returns them.
        """
        try:
            versions = self.jira_client.project_versions(project_key)
        except (JIRAError, requests.exceptions.RequestException) as e:
            logger.error(f"Failed to fetch versions for project '{project_key}': {_describe(e)}")
            raise ConnectivityError(f"Could not fetch versions for project '{project_key}': {_describe(e)}") from e

        try:
            records = [VersionRecord.from_jira(version) for version in versions or []]
        except (AttributeError, TypeError, ValueError) as e:
            logger.error(f"Malformed version in project '{project_key}': {e}")
            raise ConnectivityError(f"Malformed version returned for project '{project_key}': {e}") from e
        logger.info(f"Fetched {len(records)} versions for project '{project_key}'.")
        return records

    def has_unresolved_issues(self, version_id):
        try:
            count = self.jira_client.version_count_unresolved_issues(str(version_id))
            unresolved = int(count) > 0
        except (JIRAError, requests.exceptions.RequestException) as e:
            logger.error(f"Failed to count unresolved issues for version {version_id}: {_describe(e)}")
            raise ConnectivityError(f"Could not check unresolved issues for version {version_id}: {_describe(e)}") from e
        except (KeyError, TypeError, ValueError) as e:
            logger.error(f"Malformed unresolved issue count for version {version_id}: {e!r}")
            raise ConnectivityError(f"Malformed unresolved issue count for version {version_id}: {e!r}") from e
        return unresolved


@dataclass(frozen=True)
class JiraSite:
    server: str
    email: Optional[str] = None
    api_token: Optional[str] = None
    timeout: float = DEFAULT_JIRA_TIMEOUT

    @classmethod
    def from_env(cls):
        """Reads the site from JIRA_* variables; None when no server is set."""
        server = os.getenv("JIRA_SERVER")
        if not server:
            return None
        return cls(
            server=server.rstrip('/'),
            email=os.getenv("JIRA_EMAIL"),
            api_token=os.getenv("JIRA_API_TOKEN"),
            timeout=float(os.getenv("JIRA_TIMEOUT", DEFAULT_JIRA_TIMEOUT)),
        )

    def create_session(self):
        """Creates an authenticated session, or None when remote access is not configured."""
        if not self.email or not self.api_token:
            return None
        try:
            jira_options = {'server': self.server}
            logger.info(f"Connecting to Jira at {self.server} as {self.email}")
            jira_client = JIRA(options=jira_options, basic_auth=(self.email, self.api_token),
                               max_retries=1, timeout=self.timeout)
        except (JIRAError, requests.exceptions.RequestException) as e:
            logger.error(f"Failed to create/authenticate JIRA client: {_describe(e)}")
            raise ConnectivityError(f"Failed to connect to Jira at {self.server}: {_describe(e)}") from e
        return JiraSession(jira_client)


@dataclass(frozen=True)
class ProjectContext:
    """The pipeline project a request is made for."""

    name: str
    jira_site: Optional[JiraSite] = None


def get_site(context):
    if context is None:
        return None
    return context.jira_site
