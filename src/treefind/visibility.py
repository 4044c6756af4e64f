"""Hidden-entry detection."""

import os
import stat
import sys

IS_WINDOWS = sys.platform == "win32"

FILE_ATTRIBUTE_HIDDEN = stat.FILE_ATTRIBUTE_HIDDEN


def entry_attributes(entry: os.DirEntry[str]) -> int:
    """Get Windows file attributes for a directory entry.

    On Windows the stat result is cached by scandir, so this does not hit
    the filesystem again. Elsewhere it returns 0 without a stat call.
    """
    if not IS_WINDOWS:
        return 0
    try:
        return getattr(entry.stat(follow_symlinks=False), "st_file_attributes", 0)
    except OSError:
        return 0


def is_hidden(name: str, attributes: int = 0) -> bool:
    """Check whether an entry is hidden by platform convention.

    Args:
        name: Entry name
        attributes: Windows file attribute bits (0 elsewhere)

    Returns:
        True for dot-names, or entries with the hidden attribute set

    """
    if name.startswith("."):
        return True
    return bool(attributes & FILE_ATTRIBUTE_HIDDEN)


def is_visible(name: str, show_hidden: bool, attributes: int = 0) -> bool:
    """Check whether an entry passes the visibility filter."""
    return show_hidden or not is_hidden(name, attributes)
