"""Value types shared by the filter engine and the parameter definitions."""

import re
from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from .errors import ConfigurationError
from .utils import format_release_date


@dataclass(frozen=True)
class VersionRecord:
    """One version of a Jira project, as fetched from the server."""

    name: str
    id: Optional[int] = None
    released: bool = False
    archived: bool = False
    release_date: Optional[date] = None

    @classmethod
    def from_jira(cls, version):
        """Builds a record from a `jira` library Version resource."""
        raw_id = getattr(version, 'id', None)
        raw_date = getattr(version, 'releaseDate', None)
        return cls(
            name=version.name,
            id=int(raw_id) if raw_id is not None else None,
            released=bool(getattr(version, 'released', False)),
            archived=bool(getattr(version, 'archived', False)),
            release_date=_parse_release_date(raw_date),
        )


def _parse_release_date(raw_date):
    if not raw_date:
        return None
    if isinstance(raw_date, datetime):
        return raw_date.date()
    if isinstance(raw_date, date):
        return raw_date
    return datetime.strptime(raw_date[:10], "%Y-%m-%d").date()


@dataclass(frozen=True)
class FilterConfig:
    name_pattern: Optional[re.Pattern] = None
    include_released: bool = False
    include_archived: bool = False
    include_future: bool = False
    require_all_resolved: bool = False

    @classmethod
    def build(cls, pattern=None, include_released=False, include_archived=False,
              include_future=False, require_all_resolved=False):
        """
        Compiles the name pattern once so every filtering pass reuses it.

        An empty or missing pattern disables the name filter. An invalid
        pattern raises ConfigurationError here rather than at filter time.
        """
        compiled = None
        if pattern:
            try:
                compiled = re.compile(pattern)
            except re.error as e:
                raise ConfigurationError(f"Invalid release pattern '{pattern}': {e}") from e
        return cls(
            name_pattern=compiled,
            include_released=include_released,
            include_archived=include_archived,
            include_future=include_future,
            require_all_resolved=require_all_resolved,
        )

    @property
    def pattern_string(self):
        if self.name_pattern is None:
            return ""
        return self.name_pattern.pattern


@dataclass(frozen=True)
class Result:
    """A candidate offered to the chooser."""

    name: str
    id: Optional[int]
    display_name: str

    @classmethod
    def from_record(cls, record):
        display_name = f"{record.name} (Release date: {format_release_date(record.release_date)})"
        return cls(name=record.name, id=record.id, display_name=display_name)

    def to_dict(self):
        return {'name': self.name, 'id': self.id, 'displayName': self.display_name}


@dataclass(frozen=True)
class ParameterValue:
    """The version chosen for one build. Equal by (name, value)."""

    name: str
    value: str

    @classmethod
    def from_dict(cls, data):
        return cls(name=data['name'], value=data['value'])

    def to_dict(self):
        return {'name': self.name, 'value': self.value}

    def build_variables(self):
        """Variables exposed to the build environment."""
        return {self.name: self.value}

    def __str__(self):
        return f"(JiraVersionParameterValue) {self.name}='{self.value}'"
