"""
Parsers for raw device command output.
"""

from .line_record_parser import (
    PACKAGE_PREFIX,
    INSTALLER_PREFIX,
    UID_PREFIX,
    strip_prefix,
    iter_prefixed_values,
    parse_int,
    first_token
)

__all__ = [
    'PACKAGE_PREFIX',
    'INSTALLER_PREFIX',
    'UID_PREFIX',
    'strip_prefix',
    'iter_prefixed_values',
    'parse_int',
    'first_token'
]
