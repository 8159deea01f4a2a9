"""Idempotent, conflict-aware file writing.

``MergeWriter`` commits rendered artifacts into the output tree:

- a missing file is created, parents included;
- an existing file that already contains the new content verbatim is left
  alone (exact substring containment is the only equality test, so any
  whitespace or ordering difference counts as a conflict);
- any other existing file, including one that is not UTF-8 text, is a
  conflict resolved by the injected ``confirm_overwrite`` callable:
  ``True`` replaces the file wholesale, anything else keeps it
  byte-for-byte.
"""

from __future__ import annotations

from collections.abc import Callable
from enum import Enum
from pathlib import Path

from archgen.scaffolder.models import Artifact
from archgen.utils import print_info, print_success, print_warning

ConfirmOverwrite = Callable[[Path], bool]


class WriteError(Exception):
    """Raised when the filesystem refuses a read, mkdir or write."""

    def __init__(self, path: Path, message: str) -> None:
        self.path = path
        super().__init__(f"Cannot write {path}: {message}")


class WriteOutcome(str, Enum):
    """What ``MergeWriter.write`` did with a file."""
    CREATED = "created"
    UNCHANGED = "unchanged"
    OVERWRITTEN = "overwritten"
    SKIPPED = "skipped"


def decline_all(path: Path) -> bool:
    """Conflict policy that keeps every existing file."""
    return False


class MergeWriter:
    """Writes rendered content under *root* without clobbering edits.

    Attributes:
        root: Output root; artifact paths are resolved against it.
        confirm_overwrite: Called with the target path on a conflict.
        verbose: Report every outcome on the shared console.
    """

    def __init__(
        self,
        root: str | Path,
        confirm_overwrite: ConfirmOverwrite = decline_all,
        *,
        verbose: bool = True,
    ) -> None:
        self.root = Path(root)
        self.confirm_overwrite = confirm_overwrite
        self.verbose = verbose

    def write_artifact(self, artifact: Artifact) -> WriteOutcome:
        """Write a rendered artifact to ``root / artifact.relative_path``."""
        return self.write(self.root / artifact.relative_path, artifact.content)

    def write(self, path: str | Path, content: str) -> WriteOutcome:
        """Write *content* to *path* following the merge rules.

        Raises:
            WriteError: If the filesystem operation fails.
        """
        target = Path(path)

        if not target.exists():
            try:
                target.parent.mkdir(parents=True, exist_ok=True)
                target.write_text(content, encoding="utf-8")
            except OSError as exc:
                raise WriteError(target, exc.strerror or str(exc)) from exc
            self._report(WriteOutcome.CREATED, target)
            return WriteOutcome.CREATED

        # An undecodable file cannot contain the content; it is a conflict.
        try:
            existing: str | None = target.read_text(encoding="utf-8")
        except UnicodeDecodeError:
            existing = None
        except OSError as exc:
            raise WriteError(target, exc.strerror or str(exc)) from exc

        if existing is not None and content in existing:
            self._report(WriteOutcome.UNCHANGED, target)
            return WriteOutcome.UNCHANGED

        if self.confirm_overwrite(target) is not True:
            self._report(WriteOutcome.SKIPPED, target)
            return WriteOutcome.SKIPPED

        try:
            target.write_text(content, encoding="utf-8")
        except OSError as exc:
            raise WriteError(target, exc.strerror or str(exc)) from exc
        self._report(WriteOutcome.OVERWRITTEN, target)
        return WriteOutcome.OVERWRITTEN

    def _report(self, outcome: WriteOutcome, path: Path) -> None:
        if not self.verbose:
            return
        if outcome is WriteOutcome.CREATED:
            print_success(f"Created new file: {path}")
        elif outcome is WriteOutcome.OVERWRITTEN:
            print_success(f"Updated file: {path}")
        elif outcome is WriteOutcome.UNCHANGED:
            print_info(f"Content already exists in file: {path}")
        else:
            print_warning(f"Skipped updating file: {path}")
