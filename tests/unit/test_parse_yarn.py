"""Tests for yarn.lock parsing."""

import pytest

from lockparse.errors import (
    InvalidIndentation,
    LockfileError,
    TokenStreamExhausted,
    UnexpectedToken,
    UnsupportedLockfileVersion,
)
from lockparse.parse_yarn import LockfileParser, parse, parse_lockfile


class TestYarnParser:
    """Test yarn.lock parsing."""

    def test_parse_sample(self, sample_lockfile):
        """Should parse nested blocks into nested mappings."""
        assert parse(sample_lockfile) == {
            "foo@^1.0.0": {
                "version": "1.0.0",
                "resolved": "https://registry.example/foo-1.0.0.tgz#abcdef",
                "dependencies": {"bar": "^2.0.0"},
            }
        }

    def test_parse_yarn_output(self, scoped_lockfile):
        """Should parse quoted scoped keys, aliases and unquoted values."""
        result = parse(scoped_lockfile)

        assert set(result) == {
            "@babel/code-frame@^7.0.0",
            "@babel/code-frame@^7.10.4",
            "lodash@^4.17.19",
            "lodash@^4.17.20",
        }

        babel = result["@babel/code-frame@^7.10.4"]
        assert babel["version"] == "7.10.4"
        assert babel["integrity"].startswith("sha512-vG6SvB6")
        assert babel["integrity"].endswith("==")
        assert babel["dependencies"] == {"@babel/highlight": "^7.10.4"}
        assert result["lodash@^4.17.19"]["version"] == "4.17.20"

    def test_alias_keys_share_one_block(self):
        """Comma-separated keys map to the identical nested object."""
        result = parse('foo@^1.0.0, foo@^1.1.0:\n  version "1.1.0"\n')

        assert list(result) == ["foo@^1.0.0", "foo@^1.1.0"]
        assert result["foo@^1.0.0"] is result["foo@^1.1.0"]
        assert result["foo@^1.0.0"] == {"version": "1.1.0"}

        result["foo@^1.0.0"]["version"] = "9.9.9"
        assert result["foo@^1.1.0"]["version"] == "9.9.9"

    def test_alias_keys_with_leaf_value(self):
        """Comma-separated keys with a plain value all receive it."""
        assert parse('a, b "1"\n') == {"a": "1", "b": "1"}

    def test_scalar_leaf_types(self):
        """Numbers and booleans keep their types."""
        result = parse("foo:\n  count 3\n  optional true\n  name bar\n")
        assert result == {"foo": {"count": 3, "optional": True, "name": "bar"}}

    def test_dedent_across_levels(self):
        """A top-level key after a deeply nested block closes both blocks."""
        content = """a@^1:
  version "1.0.0"
  dependencies:
    b "^2"
  optional false
c@^3:
  version "3.0.0"
"""
        assert parse(content) == {
            "a@^1": {
                "version": "1.0.0",
                "dependencies": {"b": "^2"},
                "optional": False,
            },
            "c@^3": {"version": "3.0.0"},
        }

    def test_quoted_escape_in_value(self):
        """Quoted values decode escapes."""
        assert parse('key "a\\"b"\n') == {"key": 'a"b'}

    def test_byte_order_mark_is_stripped(self):
        """A leading BOM is ignored."""
        assert parse('\ufefffoo "1"\n') == {"foo": "1"}

    def test_empty_input(self):
        """Empty input parses to an empty mapping."""
        assert parse("") == {}
        assert parse("\n\n") == {}

    def test_comments_are_recorded(self):
        """Comments are collected trimmed and in order."""
        lockfile = parse_lockfile("# yarn lockfile v1\n#   second  \n", "yarn.lock")

        assert lockfile.entries == {}
        assert lockfile.version == 1
        assert lockfile.comments == ["yarn lockfile v1", "second"]
        assert lockfile.source_label == "yarn.lock"

    def test_no_version_pragma(self):
        """Files without a pragma have no declared version."""
        assert parse_lockfile('foo "1"\n').version is None

    def test_package_view(self, sample_lockfile):
        """Lockfile.package gives a typed view of one block."""
        info = parse_lockfile(sample_lockfile).package("foo@^1.0.0")

        assert info.version == "1.0.0"
        assert info.resolved.endswith("#abcdef")
        assert info.dependencies == {"bar": "^2.0.0"}
        assert info.extra == {}


class TestYarnParserErrors:
    """Test rejection of malformed lockfiles."""

    def test_odd_indentation(self):
        """Three-space indentation is rejected."""
        with pytest.raises(InvalidIndentation):
            parse('foo:\n   bar "1"\n')

    def test_error_includes_source_label(self):
        """Positioned errors name the line, column and source label."""
        with pytest.raises(InvalidIndentation) as exc_info:
            parse('foo:\n   bar "1"\n', "yarn.lock")

        assert str(exc_info.value) == "Invalid number of spaces 2:1 in yarn.lock"
        assert exc_info.value.source_label == "yarn.lock"

    def test_newer_version_pragma(self):
        """A pragma declaring a newer format fails with upgrade advice."""
        with pytest.raises(UnsupportedLockfileVersion) as exc_info:
            parse('# yarn lockfile v2\nfoo "1"\n')

        assert exc_info.value.found == 2
        assert exc_info.value.supported == 1
        assert "yarn self-update" in str(exc_info.value)

    def test_newer_version_pragma_anywhere(self):
        """The pragma is checked wherever the comment appears."""
        with pytest.raises(UnsupportedLockfileVersion):
            parse('foo "1"\n# yarn lockfile v10\n')

        with pytest.raises(UnsupportedLockfileVersion):
            parse('foo:\n  # yarn lockfile v3\n  version "1"\n')

    def test_pragma_must_match_exactly(self):
        """Comments that only resemble the pragma are ignored."""
        assert parse('# yarn lockfile v2 beta\nfoo "1"\n') == {"foo": "1"}

    def test_unknown_token(self):
        """A stray character where a key is expected is rejected."""
        with pytest.raises(UnexpectedToken) as exc_info:
            parse('foo "1"\n@bar "2"\n')

        assert str(exc_info.value) == "Unknown token 2:1 in lockfile"

    def test_error_column_on_later_line(self):
        """Columns on later lines count the preceding newline."""
        with pytest.raises(UnexpectedToken) as exc_info:
            parse('foo "1"\nbar @\n')

        assert str(exc_info.value) == "Invalid value type 2:5 in lockfile"

    def test_missing_value(self):
        """A key followed by a newline has no valid value."""
        with pytest.raises(UnexpectedToken) as exc_info:
            parse("foo\n")

        assert exc_info.value.message == "Invalid value type"

    def test_malformed_quoted_value(self):
        """An undecodable quoted value surfaces as an invalid value."""
        with pytest.raises(UnexpectedToken) as exc_info:
            parse('foo "\\x"\n')

        assert str(exc_info.value) == "Invalid value type 1:4 in lockfile"

    def test_alias_list_requires_strings(self):
        """A comma must be followed by another key."""
        with pytest.raises(UnexpectedToken) as exc_info:
            parse("foo, :\n")

        assert str(exc_info.value) == "Expected string 1:5 in lockfile"

    def test_unquoted_boolean_prefixed_key(self):
        """Keys starting with true/false must be quoted."""
        with pytest.raises(UnexpectedToken):
            parse('true-case-path@^1.0.0:\n  version "1.0.0"\n')

        result = parse('"true-case-path@^1.0.0":\n  version "1.0.0"\n')
        assert result == {"true-case-path@^1.0.0": {"version": "1.0.0"}}

    def test_errors_share_base_class(self):
        """Every failure is a LockfileError."""
        with pytest.raises(LockfileError):
            parse("foo:\n   x")

    def test_token_stream_exhausted(self):
        """Advancing past EOF is an internal error."""
        parser = LockfileParser("")
        parser.next()

        with pytest.raises(TokenStreamExhausted):
            parser.next()
