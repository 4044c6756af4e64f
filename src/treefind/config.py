"""Search configuration.

SearchConfig is built once before traversal and never changes afterwards.
Values may come from a YAML file, from the command line, or both, with
command-line values taking precedence.
"""

import logging
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from treefind.exceptions import ConfigError
from treefind.gitignore import DEFAULT_IGNORE_FILENAME
from treefind.matcher import WILDCARD, normalize_extension

logger = logging.getLogger(__name__)


class SearchConfig(BaseModel):
    """Runtime configuration for a single search.

    Attributes:
        root_path: Absolute, existing directory (or single file) to search
        pattern: File name pattern with at most one '*'
        max_depth: Deepest directory level to list (None = unlimited)
        extensions: Lowercase extensions to allow (empty = all)
        show_hidden: Include dot-files and hidden directories
        include_gitignored: Skip ignore-file handling entirely
        follow_symlinks: Descend into symlinked directories (with cycle detection)
        ignore_filename: Per-directory ignore file name

    """

    # validate_default so the default root "." is resolved too
    model_config = ConfigDict(frozen=True, extra="forbid", validate_default=True)

    root_path: Path = Field(
        default=Path("."),
        description="Root directory to start the search from",
    )
    pattern: str = Field(
        default=WILDCARD,
        description="File name pattern; a single '*' matches any substring",
    )
    max_depth: int | None = Field(
        default=None,
        ge=0,
        description="Maximum depth to search; None = unlimited",
    )
    extensions: frozenset[str] = Field(
        default=frozenset(),
        description="Allowed extensions, case-insensitive; empty = all",
    )
    show_hidden: bool = False
    include_gitignored: bool = False
    follow_symlinks: bool = False
    ignore_filename: str = DEFAULT_IGNORE_FILENAME

    @field_validator("root_path", mode="after")
    @classmethod
    def resolve_root(cls, v: Path) -> Path:
        """Resolve root to an absolute path that exists and is readable."""
        try:
            resolved = v.expanduser().resolve(strict=True)
        except (OSError, RuntimeError) as e:
            raise ValueError(f"root path does not exist: {v}") from e
        if not os.access(resolved, os.R_OK):
            raise ValueError(f"root path is not readable: {resolved}")
        return resolved

    @field_validator("pattern", mode="after")
    @classmethod
    def check_single_wildcard(cls, v: str) -> str:
        """Reject patterns with more than one wildcard."""
        if v.count(WILDCARD) > 1:
            raise ValueError(f"pattern {v!r} may contain at most one '*'")
        return v

    @field_validator("extensions", mode="before")
    @classmethod
    def normalize_extensions(cls, v: Any) -> frozenset[str]:
        """Accept a comma-separated string or a list; normalize to lowercase."""
        if v is None:
            return frozenset()
        if isinstance(v, str):
            v = v.split(",")
        if isinstance(v, (list, tuple, set, frozenset)):
            return frozenset(e for e in (normalize_extension(str(x)) for x in v) if e)
        return v  # type: ignore[no-any-return]

    @field_validator("ignore_filename", mode="after")
    @classmethod
    def check_ignore_filename(cls, v: str) -> str:
        """Ignore file name must be a bare file name."""
        if not v or "/" in v or "\\" in v:
            raise ValueError(f"invalid ignore file name: {v!r}")
        return v


def load_config_file(path: Path) -> dict[str, Any]:
    """Load search settings from a YAML file.

    Args:
        path: YAML file whose top-level keys are SearchConfig field names

    Returns:
        Mapping of settings (empty for an empty file)

    Raises:
        ConfigError: If the file cannot be read or is not a YAML mapping.

    """
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e

    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in config file {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping, got {type(data).__name__}")

    logger.debug("Loaded config file %s: %s", path, sorted(data))
    return data


def build_search_config(
    config_file: Path | None = None,
    **overrides: Any,
) -> SearchConfig:
    """Build a validated SearchConfig.

    Args:
        config_file: Optional YAML file with base settings
        **overrides: Field values that win over the file; None values are skipped

    Returns:
        Validated, frozen SearchConfig

    Raises:
        ConfigError: If any setting is invalid or the root cannot be resolved.

    """
    data: dict[str, Any] = load_config_file(config_file) if config_file is not None else {}
    data.update({key: value for key, value in overrides.items() if value is not None})

    try:
        return SearchConfig(**data)
    except ValidationError as e:
        messages = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or 'config'}: {err['msg']}"
            for err in e.errors()
        )
        raise ConfigError(f"Invalid search configuration: {messages}") from e
