"""Dependency registration in a Flutter project's ``pubspec.yaml``.

Missing dependencies are added as new lines directly under the top-level
``dependencies:`` key, so the rest of the file (comments, ordering,
formatting) is preserved.  Existing entries are never changed or removed,
whatever version they pin.
"""

from __future__ import annotations

import re
from pathlib import Path

import yaml

PUBSPEC = "pubspec.yaml"

_DEPENDENCIES_HEADER = re.compile(r"^dependencies:[ \t]*(#.*)?$")


class ManifestParseError(Exception):
    """Raised when ``pubspec.yaml`` is not a YAML mapping we can extend."""


def read_dependencies(text: str) -> dict[str, object]:
    """Return the top-level ``dependencies`` mapping of a pubspec document.

    Raises:
        ManifestParseError: If the document is not valid YAML, is not a
            mapping, or has a non-mapping ``dependencies`` value.
    """
    try:
        document = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ManifestParseError(f"Invalid YAML: {exc}") from exc

    if document is None:
        return {}
    if not isinstance(document, dict):
        raise ManifestParseError("Top-level document is not a mapping")

    dependencies = document.get("dependencies")
    if dependencies is None:
        return {}
    if not isinstance(dependencies, dict):
        raise ManifestParseError("'dependencies' is not a mapping")
    return dependencies


def add_dependencies(text: str, required: dict[str, str]) -> tuple[str, list[str]]:
    """Add the entries of *required* that *text* lacks.

    Returns:
        ``(new_text, added_names)``; *new_text* equals *text* when nothing
        was missing.

    Raises:
        ManifestParseError: See ``read_dependencies``; also raised when
            ``dependencies`` uses flow style (``dependencies: {...}``).
    """
    existing = read_dependencies(text)
    missing = [name for name in required if name not in existing]
    if not missing:
        return text, []

    lines = text.splitlines(keepends=True)
    header = next(
        (i for i, line in enumerate(lines) if _DEPENDENCIES_HEADER.match(line.rstrip("\r\n"))),
        None,
    )

    if header is None:
        if existing or re.search(r"^dependencies:", text, flags=re.MULTILINE):
            raise ManifestParseError("'dependencies' is not a block mapping")
        block = "dependencies:\n" + "".join(f"  {name}: {required[name]}\n" for name in missing)
        separator = "" if not text or text.endswith("\n") else "\n"
        return f"{text}{separator}{block}", missing

    indent = _child_indent(lines, header)
    new_lines = [f"{indent}{name}: {required[name]}\n" for name in missing]
    if not lines[header].endswith("\n"):
        lines[header] += "\n"
    lines[header + 1:header + 1] = new_lines
    return "".join(lines), missing


def update_pubspec(project_path: str | Path, required: dict[str, str]) -> list[str]:
    """Add missing *required* dependencies to ``<project_path>/pubspec.yaml``.

    Returns:
        Names of the dependencies that were added, in *required* order.

    Raises:
        FileNotFoundError: If the project has no ``pubspec.yaml``.
        ManifestParseError: If the file is not UTF-8 text or cannot be
            parsed or extended.
    """
    pubspec = Path(project_path) / PUBSPEC
    if not pubspec.is_file():
        raise FileNotFoundError(f"{PUBSPEC} not found at {pubspec}")

    try:
        text = pubspec.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise ManifestParseError(f"{PUBSPEC} is not valid UTF-8: {exc}") from exc
    new_text, added = add_dependencies(text, required)
    if added:
        pubspec.write_text(new_text, encoding="utf-8")
    return added


def _child_indent(lines: list[str], header: int) -> str:
    """Indentation used by the entries under the header line."""
    for line in lines[header + 1:]:
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue
        indent = line[: len(line) - len(line.lstrip(" \t"))]
        return indent or "  "
    return "  "
