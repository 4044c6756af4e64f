"""Exception hierarchy for treefind.

Only configuration problems are raised to callers. Failures met while
walking (unreadable directories, broken ignore files) are handled inside
the walker and never surface as exceptions.
"""


class TreefindError(Exception):
    """Base exception for all treefind errors."""

    pass


class ConfigError(TreefindError):
    """Search configuration is invalid.

    Raised when:
    - Root path does not exist or cannot be read
    - Pattern contains more than one wildcard
    - Max depth is negative
    - Config file is missing or not valid YAML
    """

    pass
