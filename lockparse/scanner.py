"""Tokenizer for yarn lockfile text."""

import json
import logging

from .config import DEFAULT_SOURCE_LABEL, INDENT_WIDTH, WORD_TERMINATORS
from .errors import InvalidIndentation, MalformedQuotedString, TokenStreamExhausted
from .models import Token, TokenKind

logger = logging.getLogger(__name__)


def decode_quoted(literal: str) -> str:
    """Decode a double-quoted literal using JSON string escape rules."""
    try:
        value = json.loads(literal)
    except json.JSONDecodeError as e:
        raise MalformedQuotedString(f"Malformed quoted string {literal!r}: {e.msg}") from e
    if not isinstance(value, str):
        raise MalformedQuotedString(f"Not a quoted string: {literal!r}")
    return value


class Scanner:
    """Cursor over lockfile text producing one Token per ``next_token()`` call.

    The scanner owns its position state (offset, line, column and whether the
    previous step consumed a newline). It is single-pass: once the EOF token
    has been produced, any further request raises TokenStreamExhausted.
    Iterating a Scanner yields the remaining tokens, ending with EOF.
    """

    def __init__(self, text: str, source_label: str = DEFAULT_SOURCE_LABEL):
        self.text = text
        self.source_label = source_label
        self.pos = 0
        self.line = 1
        self.column = 0
        self._after_newline = False
        self._finished = False

    def __iter__(self):
        while not self._finished:
            yield self.next_token()

    def next_token(self) -> Token:
        """Advance past the next lexical unit and return its token."""
        if self._finished:
            raise TokenStreamExhausted("No more tokens")

        while self.pos < len(self.text):
            token = self._step()
            if token is not None:
                return token

        self._finished = True
        return self._token(TokenKind.EOF)

    def _token(self, kind: TokenKind, value=None) -> Token:
        return Token(line=self.line, column=self.column, kind=kind, value=value)

    def _advance(self, count: int) -> None:
        self._after_newline = False
        self.pos += count
        self.column += count

    def _step(self) -> Token | None:
        """Classify the text at the cursor; returns None for skipped spaces."""
        text, pos = self.text, self.pos
        char = text[pos]

        if char == "\n":
            self.line += 1
            self.column = 0
            token = self._token(TokenKind.NEWLINE)
            # the newline itself counts towards the next line's columns
            self._advance(1)
            self._after_newline = True
            return token

        if char == "#":
            end = text.find("\n", pos)
            if end == -1:
                end = len(text)
            token = self._token(TokenKind.COMMENT, text[pos + 1:end])
            self._advance(end - pos)
            return token

        if char == " ":
            if not self._after_newline:
                self._advance(1)
                return None
            end = pos
            while end < len(text) and text[end] == " ":
                end += 1
            width = end - pos
            if width % INDENT_WIDTH:
                raise InvalidIndentation(
                    "Invalid number of spaces", self.line, self.column, self.source_label
                )
            token = self._token(TokenKind.INDENT, width // INDENT_WIDTH)
            self._advance(width)
            return token

        if char == '"':
            return self._quoted()

        if char.isascii() and char.isdigit():
            end = pos
            while end < len(text) and text[end].isascii() and text[end].isdigit():
                end += 1
            token = self._token(TokenKind.NUMBER, int(text[pos:end]))
            self._advance(end - pos)
            return token

        # No word-boundary check: `trueish` is BOOLEAN(true) then STRING("ish")
        if text.startswith("true", pos):
            token = self._token(TokenKind.BOOLEAN, True)
            self._advance(4)
            return token
        if text.startswith("false", pos):
            token = self._token(TokenKind.BOOLEAN, False)
            self._advance(5)
            return token

        if char == ":":
            token = self._token(TokenKind.COLON)
            self._advance(1)
            return token
        if char == ",":
            token = self._token(TokenKind.COMMA)
            self._advance(1)
            return token

        if (char.isascii() and char.isalpha()) or char in "/-":
            end = pos
            while end < len(text) and text[end] not in WORD_TERMINATORS:
                end += 1
            token = self._token(TokenKind.STRING, text[pos:end])
            self._advance(end - pos)
            return token

        # Unrecognised character. Always move forward so the stream terminates.
        token = self._token(TokenKind.INVALID)
        self._advance(1)
        return token

    def _quoted(self) -> Token:
        """Scan a double-quoted literal and decode it with JSON string rules."""
        text, start = self.text, self.pos
        end = start + 1
        while end < len(text):
            if text[end] == '"':
                backslashes = 0
                while text[end - 1 - backslashes] == "\\":
                    backslashes += 1
                if backslashes % 2 == 0:
                    break
            end += 1
        # Include the closing quote when one was found
        end = min(end + 1, len(text))
        literal = text[start:end]

        try:
            token = self._token(TokenKind.STRING, decode_quoted(literal))
        except MalformedQuotedString as e:
            logger.debug(
                "%s at %d:%d in %s", e, self.line, self.column, self.source_label
            )
            token = self._token(TokenKind.INVALID)
        self._advance(end - start)
        return token
