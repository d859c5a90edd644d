"""Shared test fixtures for versionparam."""

from datetime import date

import pytest

from versionparam import create_app
from versionparam.models import VersionRecord

TODAY = date(2024, 5, 10)


class FakeSession:
    """Stands in for JiraSession; records every unresolved-issue lookup."""

    def __init__(self, versions=None, unresolved=None, lookup_error=None):
        self.versions = list(versions or [])
        self.unresolved = set(unresolved or [])
        self.lookup_error = lookup_error
        self.fetched_keys = []
        self.lookups = []

    def fetch_versions(self, project_key):
        self.fetched_keys.append(project_key)
        return list(self.versions)

    def has_unresolved_issues(self, version_id):
        self.lookups.append(version_id)
        if self.lookup_error is not None:
            raise self.lookup_error
        return version_id in self.unresolved


class FakeSite:
    def __init__(self, session):
        self.session = session

    def create_session(self):
        return self.session


@pytest.fixture
def records():
    return [
        VersionRecord(name="1.0", id=10, released=True, release_date=date(2024, 1, 15)),
        VersionRecord(name="1.1", id=11, archived=True, release_date=date(2024, 3, 1)),
        VersionRecord(name="2.0", id=20, release_date=date(2024, 5, 10)),
        VersionRecord(name="2.1-beta", id=21, release_date=date(2024, 6, 30)),
        VersionRecord(name="3.0", id=None, release_date=None),
    ]


@pytest.fixture
def session(records):
    return FakeSession(records)


@pytest.fixture
def site(session):
    return FakeSite(session)


@pytest.fixture
def app(site):
    return create_app({
        'TESTING': True,
        'JIRA_SITE': site,
        'PARAMETER_DEFINITIONS': [
            {"name": "RELEASE", "description": "Release to build", "jiraProjectKey": "STM"},
            {"name": "FUTURE", "jiraProjectKey": "STM", "jiraShowFuture": "true"},
        ],
    })


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def runner(app):
    return app.test_cli_runner()
