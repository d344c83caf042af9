"""Lockfile format detection."""

import re

from .config import VERSION_PRAGMA


def identify(content: str, filename: str | None = None) -> str:
    """Detect lockfile format from content and filename hints.

    Args:
        content: The lockfile content
        filename: Optional filename for additional context

    Returns:
        Detected format: 'yarn', 'npm', or 'unknown'
    """
    # Filename-based detection (takes precedence)
    if filename:
        if filename.endswith("yarn.lock"):
            return "yarn"
        if filename.endswith(("package-lock.json", "npm-shrinkwrap.json")):
            return "npm"

    if declared_version(content) is not None:
        return "yarn"

    # Content-based detection
    yarn_patterns = [
        r'^"?[@\w][^\n]*@[^\n]*:$',  # foo@^1.0.0:
        r"^  version \"[^\"]*\"$",  # indented version line
    ]

    if all(re.search(pattern, content, re.MULTILINE) for pattern in yarn_patterns):
        return "yarn"

    if re.search(r'"lockfileVersion"\s*:', content):
        return "npm"

    return "unknown"


def declared_version(content: str) -> int | None:
    """Return the version from a `# yarn lockfile vN` comment, if any."""
    for line in content.splitlines():
        stripped = line.strip()
        if not stripped.startswith("#"):
            continue
        match = VERSION_PRAGMA.match(stripped[1:].strip())
        if match:
            return int(match.group(1))
    return None
