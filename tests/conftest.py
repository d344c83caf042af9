"""Pytest configuration and fixtures."""


import pytest


@pytest.fixture
def sample_lockfile():
    """Minimal yarn.lock content with one nested dependencies block."""
    return """# yarn lockfile v1

foo@^1.0.0:
  version "1.0.0"
  resolved "https://registry.example/foo-1.0.0.tgz#abcdef"
  dependencies:
    bar "^2.0.0"
"""


@pytest.fixture
def scoped_lockfile():
    """yarn.lock content shaped like real yarn output, with aliases and scopes."""
    return """# THIS IS AN AUTOGENERATED FILE. DO NOT EDIT THIS FILE DIRECTLY.
# yarn lockfile v1


"@babel/code-frame@^7.0.0", "@babel/code-frame@^7.10.4":
  version "7.10.4"
  resolved "https://registry.yarnpkg.com/@babel/code-frame/-/code-frame-7.10.4.tgz#168da1a3"
  integrity sha512-vG6SvB6oYEhvgisZNFRmRCUkLz11c7rp+tbNTynGqc6mS1d5ATd/sGyV6W0KZZnXRKMTzZDRgQT3Ou9jhpAfUg==
  dependencies:
    "@babel/highlight" "^7.10.4"

lodash@^4.17.19, lodash@^4.17.20:
  version "4.17.20"
  resolved "https://registry.yarnpkg.com/lodash/-/lodash-4.17.20.tgz#b44a9b6297bcb698f1c51a3545a2b3b368d59c52"
"""


@pytest.fixture
def temp_lockfile(tmp_path, sample_lockfile):
    """Write the sample lockfile to a temporary yarn.lock."""
    lockfile = tmp_path / "yarn.lock"
    lockfile.write_text(sample_lockfile, encoding="utf-8")
    return lockfile
