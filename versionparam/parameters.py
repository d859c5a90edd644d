"""Parameter definitions: turn submissions into values and list candidates."""

import abc
import logging
from datetime import date

from .config import DISPLAY_NAME
from .errors import ConfigurationError
from .filters import filter_versions
from .jira_service import get_site
from .models import FilterConfig, ParameterValue
from .utils import parse_bool

logger = logging.getLogger(__name__)


class ParameterDefinition(abc.ABC):
    """A build parameter the pipeline asks for before a run."""

    def __init__(self, name, description=""):
        self.name = name
        self.description = description or ""

    @abc.abstractmethod
    def candidate_list(self, context):
        """Returns the choices to display for `context`."""

    @abc.abstractmethod
    def value_from_single_submission(self, values):
        """Builds a value from raw submitted strings, or None."""

    @abc.abstractmethod
    def value_from_structured_submission(self, payload):
        """Builds a value from a structured `{name, value}` payload."""

    @abc.abstractmethod
    def value_from_command_line(self, raw_value):
        """Builds a value from a command-line argument."""


class JiraVersionParameterDefinition(ParameterDefinition):
    """Lets a user pick one version of a Jira project."""

    display_name = DISPLAY_NAME

    def __init__(self, name, description="", jira_project_key=None, jira_release_pattern=None,
                 jira_show_released="false", jira_show_archived="false",
                 jira_show_future="false", jira_show_resolved="false"):
        super().__init__(name, description)
        self.project_key = jira_project_key
        self.filter_config = FilterConfig.build(
            pattern=jira_release_pattern,
            include_released=parse_bool(jira_show_released),
            include_archived=parse_bool(jira_show_archived),
            include_future=parse_bool(jira_show_future),
            require_all_resolved=parse_bool(jira_show_resolved),
        )

    def candidate_list(self, context, today=None):
        site = get_site(context)
        if site is None:
            project_name = context.name if context is not None else "(unknown)"
            raise ConfigurationError(f"JIRA site needs to be configured in the project {project_name}")

        session = site.create_session()
        if session is None:
            raise ConfigurationError("Remote access for JIRA isn't configured")

        versions = session.fetch_versions(self.project_key)
        logger.info(f"Filtering {len(versions)} versions of '{self.project_key}' for parameter '{self.name}'.")
        return filter_versions(versions, self.filter_config, today or date.today(),
                               session.has_unresolved_issues)

    def value_from_single_submission(self, values):
        if values is None or len(values) != 1:
            return None
        return ParameterValue(self.name, values[0])

    def value_from_structured_submission(self, payload):
        if 'value' not in payload:
            raise ValueError(f"Payload for parameter '{self.name}' has no 'value'.")
        if not isinstance(payload['value'], str):
            raise ValueError(f"Value for parameter '{self.name}' must be a string.")
        return ParameterValue(payload.get('name') or self.name, payload['value'])

    def value_from_command_line(self, raw_value):
        # Trusted as-is; not checked against the candidate list.
        return ParameterValue(self.name, raw_value)

    # --- Persisted fields ---
    @property
    def jira_release_pattern(self):
        return self.filter_config.pattern_string

    @property
    def jira_show_released(self):
        return _bool_string(self.filter_config.include_released)

    @property
    def jira_show_archived(self):
        return _bool_string(self.filter_config.include_archived)

    @property
    def jira_show_future(self):
        return _bool_string(self.filter_config.include_future)

    @property
    def jira_show_resolved(self):
        return _bool_string(self.filter_config.require_all_resolved)

    def to_dict(self):
        return {
            'name': self.name,
            'description': self.description,
            'jiraProjectKey': self.project_key,
            'jiraReleasePattern': self.jira_release_pattern,
            'jiraShowReleased': self.jira_show_released,
            'jiraShowArchived': self.jira_show_archived,
            'jiraShowFuture': self.jira_show_future,
            'jiraShowResolved': self.jira_show_resolved,
        }

    @classmethod
    def from_dict(cls, data):
        return cls(
            name=data['name'],
            description=data.get('description', ""),
            jira_project_key=data.get('jiraProjectKey'),
            jira_release_pattern=data.get('jiraReleasePattern'),
            jira_show_released=data.get('jiraShowReleased', "false"),
            jira_show_archived=data.get('jiraShowArchived', "false"),
            jira_show_future=data.get('jiraShowFuture', "false"),
            jira_show_resolved=data.get('jiraShowResolved', "false"),
        )


def _bool_string(value):
    return "true" if value else "false"


def load_definitions(raw_definitions):
    """Builds a {name: definition} registry from persisted dicts."""
    definitions = {}
    for data in raw_definitions or []:
        definition = JiraVersionParameterDefinition.from_dict(data)
        definitions[definition.name] = definition
    return definitions


def get_definition_by_name(definitions, name):
    if name not in definitions:
        raise KeyError(f"Parameter '{name}' not found in configuration.")
    return definitions[name]
