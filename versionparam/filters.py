import logging
from datetime import datetime

from .errors import ConfigurationError
from .models import Result

logger = logging.getLogger(__name__)


def match_version(record, config, today, has_unresolved_issues=None):
    """
    Decides whether a single version is offered to the chooser.

    Predicates run in a fixed order and stop at the first rejection, so the
    unresolved-issue lookup (the only remote call) happens last and only for
    versions that passed every local check.
    """
    # Match regex if it exists
    if config.name_pattern is not None:
        if config.name_pattern.fullmatch(record.name) is None:
            return False

    if not config.include_released and record.released:
        return False

    if not config.include_archived and record.archived:
        return False

    # Only versions due today or later; undated versions are not future ones
    if config.include_future:
        if record.release_date is None or record.release_date < today:
            return False

    if config.require_all_resolved:
        if record.id is None:
            return False
        if has_unresolved_issues is None:
            raise ConfigurationError("Filtering on resolved issues needs a Jira session.")
        return not has_unresolved_issues(record.id)

    return True


def filter_versions(records, config, today, has_unresolved_issues=None):
    """
    Projects fetched versions onto the ordered candidate list.

    Returns:
        list: Result objects in the same order as `records`.

    Lookup failures propagate; no partial list is returned.
    """
    if isinstance(today, datetime):
        today = today.date()

    results = []
    total = 0
    for record in records or []:
        total += 1
        if match_version(record, config, today, has_unresolved_issues):
            results.append(Result.from_record(record))

    logger.debug(f"Kept {len(results)} of {total} versions (pattern={config.pattern_string!r}).")
    return results
