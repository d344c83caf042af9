"""yarn.lock parsing."""

import logging

from .config import BYTE_ORDER_MARK, DEFAULT_SOURCE_LABEL, LOCKFILE_VERSION, VERSION_PRAGMA
from .errors import UnexpectedToken, UnsupportedLockfileVersion
from .models import LockInfo, Lockfile, Token, TokenKind
from .scanner import Scanner

logger = logging.getLogger(__name__)


class LockfileParser:
    """Recursive-descent parser for yarn lockfiles.

    Nesting is driven entirely by INDENT tokens: each ``parse(depth)`` call
    builds one mapping and returns as soon as a line is indented less than
    ``depth``.
    """

    def __init__(self, content: str, source_label: str = DEFAULT_SOURCE_LABEL):
        self.source_label = source_label
        self.tokens = Scanner(content, source_label)
        self.token: Token | None = None
        self.comments: list[str] = []
        self.version: int | None = None

    def _on_comment(self, token: Token) -> None:
        """Record a comment and enforce the version pragma."""
        comment = token.as_string().strip()

        match = VERSION_PRAGMA.match(comment)
        if match:
            version = int(match.group(1))
            if version > LOCKFILE_VERSION:
                raise UnsupportedLockfileVersion(version, LOCKFILE_VERSION)
            self.version = version

        self.comments.append(comment)

    def next(self) -> Token:
        """Advance to the next non-comment token and make it current."""
        token = self.tokens.next_token()
        while token.kind is TokenKind.COMMENT:
            self._on_comment(token)
            token = self.tokens.next_token()
        self.token = token
        return token

    def unexpected(self, message: str = "Unexpected token"):
        raise UnexpectedToken(message, self.token.line, self.token.column, self.source_label)

    def _key(self, token: Token) -> str:
        key = token.as_string()
        if not key:
            self.unexpected("Expected a key")
        return key

    def parse(self, indent: int = 0) -> LockInfo:
        """Parse one block at the given depth and return its mapping."""
        obj: LockInfo = {}

        while True:
            prop_token = self.token

            if prop_token.kind is TokenKind.NEWLINE:
                next_token = self.next()
                if not indent:
                    # blank lines don't matter at the top level
                    continue

                if next_token.kind is not TokenKind.INDENT:
                    # no indentation after a newline: back to depth 0
                    break

                if next_token.as_indent() == indent:
                    self.next()
                else:
                    break

            elif prop_token.kind is TokenKind.INDENT:
                if prop_token.as_indent() == indent:
                    self.next()
                else:
                    break

            elif prop_token.kind is TokenKind.EOF:
                break

            elif prop_token.kind is TokenKind.STRING:
                keys = [self._key(prop_token)]
                self.next()

                # `a, b, c:` declares aliases for one block
                while self.token.kind is TokenKind.COMMA:
                    self.next()
                    if self.token.kind is not TokenKind.STRING:
                        self.unexpected("Expected string")
                    keys.append(self._key(self.token))
                    self.next()

                value_token = self.token

                if value_token.kind is TokenKind.COLON:
                    self.next()
                    value = self.parse(indent + 1)

                    # every alias shares the same mapping object
                    for key in keys:
                        obj[key] = value

                    if indent and self.token.kind is not TokenKind.INDENT:
                        break

                elif value_token.is_value:
                    for key in keys:
                        obj[key] = value_token.value
                    self.next()

                else:
                    self.unexpected("Invalid value type")

            else:
                self.unexpected("Unknown token")

        return obj


def parse_lockfile(content: str, source_label: str = DEFAULT_SOURCE_LABEL) -> Lockfile:
    """Parse yarn.lock content into a Lockfile.

    Args:
        content: The lockfile text, optionally starting with a byte order mark
        source_label: Name used in error messages, usually the file path

    Returns:
        Parsed Lockfile with entries, declared version and comments

    Raises:
        LockfileError: On any lexical or grammar violation
    """
    if content.startswith(BYTE_ORDER_MARK):
        content = content[len(BYTE_ORDER_MARK):]

    parser = LockfileParser(content, source_label)
    parser.next()
    entries = parser.parse()

    logger.debug("Parsed %d entries from %s", len(entries), source_label)
    return Lockfile(
        source_label=source_label,
        entries=entries,
        version=parser.version,
        comments=parser.comments,
    )


def parse(content: str, source_label: str = DEFAULT_SOURCE_LABEL) -> LockInfo:
    """Parse yarn.lock content into a nested mapping of `name@range` keys."""
    return parse_lockfile(content, source_label).entries
