from .config import DATE_FORMAT, MISSING_RELEASE_DATE


def parse_bool(value):
    """Reads a persisted toggle. Only 'true' (any case) or True count as set."""
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    return str(value).lower() == "true"


def format_release_date(release_date):
    """Formats a release date for display, with a placeholder when unset."""
    if release_date is None:
        return MISSING_RELEASE_DATE
    return release_date.strftime(DATE_FORMAT)
