class VersionParameterError(Exception):
    """Base class for errors raised while producing version candidates."""


class ConfigurationError(VersionParameterError):
    """No usable Jira site, remote access or filter configuration."""


class ConnectivityError(VersionParameterError):
    """A call to Jira failed (network, authentication or bad response)."""
