"""Version lookups against a parsed lockfile."""

import logging
from dataclasses import dataclass

from .models import LockInfo, PackageInfo

logger = logging.getLogger(__name__)


@dataclass
class ResolvedPackage:
    """One lockfile block together with every specifier that points at it."""

    name: str
    specs: list[str]
    info: PackageInfo


def split_spec(spec: str) -> tuple[str, str]:
    """Split `name@range` into its name and range.

    Scoped names keep their leading `@`: `@babel/core@^7.0.0` gives
    (`@babel/core`, `^7.0.0`). A spec without a range gives an empty range.
    """
    index = spec.rfind("@")
    if index <= 0:
        return spec, ""
    return spec[:index], spec[index + 1:]


def resolve_version(entries: LockInfo, name: str, version_range: str) -> str | None:
    """Return the locked version for `name@version_range`, or None."""
    block = entries.get(f"{name}@{version_range}")
    if not isinstance(block, dict):
        return None
    version = block.get("version")
    return None if version is None else str(version)


def resolve_dependencies(entries: LockInfo, dependencies: dict[str, str]) -> dict[str, str | None]:
    """Resolve a package.json style `{name: range}` mapping to locked versions.

    Args:
        entries: Parsed lockfile entries
        dependencies: Mapping of package name to version range

    Returns:
        Mapping of package name to locked version, None where the lockfile
        has no matching entry
    """
    resolved = {}
    for name, version_range in dependencies.items():
        resolved[name] = resolve_version(entries, name, version_range)
        if resolved[name] is None:
            logger.debug("No lockfile entry for %s@%s", name, version_range)
    return resolved


def unique_packages(entries: LockInfo) -> list[ResolvedPackage]:
    """Group alias keys that share one block, in first-seen order."""
    groups: dict[int, ResolvedPackage] = {}
    for spec, block in entries.items():
        if not isinstance(block, dict):
            continue
        group = groups.get(id(block))
        if group is None:
            name, _ = split_spec(spec)
            group = ResolvedPackage(name=name, specs=[], info=PackageInfo.from_block(block))
            groups[id(block)] = group
        group.specs.append(spec)
    return list(groups.values())
