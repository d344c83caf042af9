"""Format constants shared by the scanner and parser."""

import re

# Highest `yarn lockfile vN` version this parser understands
LOCKFILE_VERSION = 1

# Label used in error messages when the caller does not supply one
DEFAULT_SOURCE_LABEL = "lockfile"

# Spaces per nesting level
INDENT_WIDTH = 2

VERSION_PRAGMA = re.compile(r"^yarn lockfile v(\d+)$")

BYTE_ORDER_MARK = "\ufeff"

# Characters that end an unquoted word
WORD_TERMINATORS = frozenset(":\n, ")
