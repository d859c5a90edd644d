DISPLAY_NAME = "JIRA Release Version Parameter"

DATE_FORMAT = "%Y-%m-%d"
MISSING_RELEASE_DATE = "N/A"

DEFAULT_JIRA_TIMEOUT = 10

PARAMETER_DEFINITIONS = [
    {
        "name": "RELEASE",
        "description": "Unreleased versions of the project that are still open for delivery.",
        "jiraProjectKey": "STM",
        "jiraReleasePattern": "",
        "jiraShowReleased": "false",
        "jiraShowArchived": "false",
        "jiraShowFuture": "false",
        "jiraShowResolved": "false",
    },
    {
        "name": "HOTFIX_RELEASE",
        "description": "Upcoming patch versions (x.y.z) with every issue resolved.",
        "jiraProjectKey": "STM",
        "jiraReleasePattern": r"\d+\.\d+\.\d+",
        "jiraShowReleased": "false",
        "jiraShowArchived": "false",
        "jiraShowFuture": "true",
        "jiraShowResolved": "true",
    },
]
