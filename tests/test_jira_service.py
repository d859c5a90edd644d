"""Tests for the Jira site and session adapters."""

from datetime import date
from types import SimpleNamespace

import pytest
import requests
from jira import JIRAError

from versionparam import jira_service
from versionparam.errors import ConnectivityError
from versionparam.jira_service import JiraSession, JiraSite, ProjectContext, get_site
from versionparam.models import VersionRecord


class FakeJiraClient:
    def __init__(self, versions=None, counts=None, error=None):
        self.versions = versions or []
        self.counts = counts or {}
        self.error = error
        self.count_calls = []

    def project_versions(self, project_key):
        if self.error is not None:
            raise self.error
        return self.versions

    def version_count_unresolved_issues(self, version_id):
        self.count_calls.append(version_id)
        if self.error is not None:
            raise self.error
        return self.counts.get(version_id, 0)


class TestJiraSession:
    def test_fetch_versions(self):
        client = FakeJiraClient(versions=[
            SimpleNamespace(name="1.0", id="1", released=True, archived=False, releaseDate="2024-01-15"),
            SimpleNamespace(name="2.0", id="2", released=False, archived=False),
        ])
        records = JiraSession(client).fetch_versions("STM")
        assert records == [
            VersionRecord(name="1.0", id=1, released=True, release_date=date(2024, 1, 15)),
            VersionRecord(name="2.0", id=2),
        ]

    def test_fetch_versions_jira_error(self):
        client = FakeJiraClient(error=JIRAError(status_code=401, text="Unauthorized"))
        with pytest.raises(ConnectivityError, match="STM"):
            JiraSession(client).fetch_versions("STM")

    def test_fetch_versions_network_error(self):
        client = FakeJiraClient(error=requests.exceptions.ConnectionError("refused"))
        with pytest.raises(ConnectivityError):
            JiraSession(client).fetch_versions("STM")

    @pytest.mark.parametrize("resource", [
        SimpleNamespace(name="2.0", id="2", releaseDate="30/06/2024"),
        SimpleNamespace(name="2.0", id="not-a-number"),
        SimpleNamespace(id="2"),
    ])
    def test_fetch_versions_malformed_version(self, resource):
        client = FakeJiraClient(versions=[resource])
        with pytest.raises(ConnectivityError, match="Malformed version") as excinfo:
            JiraSession(client).fetch_versions("STM")
        assert isinstance(excinfo.value.__cause__, (AttributeError, ValueError))

    def test_has_unresolved_issues(self):
        client = FakeJiraClient(counts={"5": 3})
        session = JiraSession(client)
        assert session.has_unresolved_issues(5) is True
        assert session.has_unresolved_issues(6) is False
        assert client.count_calls == ["5", "6"]

    def test_has_unresolved_issues_error(self):
        client = FakeJiraClient(error=JIRAError(status_code=500, text="boom"))
        with pytest.raises(ConnectivityError):
            JiraSession(client).has_unresolved_issues(5)

    def test_has_unresolved_issues_missing_count(self):
        class MissingCountClient(FakeJiraClient):
            def version_count_unresolved_issues(self, version_id):
                return {}["issuesUnresolvedCount"]

        with pytest.raises(ConnectivityError, match="Malformed unresolved issue count") as excinfo:
            JiraSession(MissingCountClient()).has_unresolved_issues(5)
        assert isinstance(excinfo.value.__cause__, KeyError)

    def test_has_unresolved_issues_non_numeric_count(self):
        client = FakeJiraClient(counts={"5": "many"})
        with pytest.raises(ConnectivityError):
            JiraSession(client).has_unresolved_issues(5)


class TestJiraSite:
    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("JIRA_SERVER", "https://example.atlassian.net/")
        monkeypatch.setenv("JIRA_EMAIL", "ci@example.com")
        monkeypatch.setenv("JIRA_API_TOKEN", "secret")
        monkeypatch.setenv("JIRA_TIMEOUT", "5")
        site = JiraSite.from_env()
        assert site == JiraSite("https://example.atlassian.net", "ci@example.com", "secret", 5.0)

    def test_from_env_without_server(self, monkeypatch):
        monkeypatch.delenv("JIRA_SERVER", raising=False)
        assert JiraSite.from_env() is None

    def test_no_credentials_means_no_session(self):
        assert JiraSite("https://example.atlassian.net").create_session() is None

    def test_create_session(self, monkeypatch):
        created = {}

        class FakeJIRA:
            def __init__(self, **kwargs):
                created.update(kwargs)

        monkeypatch.setattr(jira_service, "JIRA", FakeJIRA)
        session = JiraSite("https://example.atlassian.net", "ci@example.com", "secret", 5).create_session()
        assert isinstance(session, JiraSession)
        assert created == {
            'options': {'server': "https://example.atlassian.net"},
            'basic_auth': ("ci@example.com", "secret"),
            'max_retries': 1,
            'timeout': 5,
        }

    def test_create_session_failure(self, monkeypatch):
        def failing_jira(**kwargs):
            raise JIRAError(status_code=401, text="Unauthorized")

        monkeypatch.setattr(jira_service, "JIRA", failing_jira)
        with pytest.raises(ConnectivityError):
            JiraSite("https://example.atlassian.net", "ci@example.com", "bad").create_session()


def test_get_site():
    site = JiraSite("https://example.atlassian.net")
    assert get_site(ProjectContext("job", site)) is site
    assert get_site(ProjectContext("job")) is None
    assert get_site(None) is None
