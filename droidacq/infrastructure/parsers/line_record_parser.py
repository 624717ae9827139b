"""
Line record parser for `pm` command output.

`pm list packages` and `pm path` emit one record per line with a fixed
prefix (`package:`, `installer=`, `uid:`). These helpers strip the
prefixes and hand back plain values; they do not validate the values.
"""

from typing import Iterator


PACKAGE_PREFIX = "package:"
INSTALLER_PREFIX = "installer="
UID_PREFIX = "uid:"


def strip_prefix(value: str, prefix: str) -> str:
    """Trim a value and remove a leading prefix if present."""
    value = value.strip()
    if prefix and value.startswith(prefix):
        value = value[len(prefix):]
    return value.strip()


def iter_prefixed_values(text: str, prefix: str) -> Iterator[str]:
    """
    Yield the value of every non-empty line with its prefix removed.

    Args:
        text: Raw multi-line command output
        prefix: Line prefix to remove, e.g. "package:"

    Yields:
        Trimmed values, in output order. Lines that are empty after
        trimming and prefix removal are dropped.
    """
    for line in text.splitlines():
        value = strip_prefix(line, prefix)
        if value:
            yield value


def parse_int(value: str, default: int = 0) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def first_token(text: str) -> str:
    """Return the first whitespace-delimited token, e.g. the hex of `md5sum` output."""
    parts = text.split(None, 1)
    return parts[0] if parts else ""
