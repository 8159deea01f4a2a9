"""Interactive operator prompts.

Every question the generator asks goes through ``OperatorPrompts`` so the
pipeline can be driven by a scripted fake in tests.  End of input (a closed
stdin) is treated as "no answer": questions fall back to their default and
confirmations are declined.
"""

from __future__ import annotations

from pathlib import Path

from rich.prompt import Confirm, Prompt

from archgen.scaffolder.models import Artifact, HTTPMethod
from archgen.utils import console


class OperatorPrompts:
    """Rich-based implementation of the interactive collaborators."""

    def ask_base_url(self, default: str) -> str:
        """Ask for the base URL of a relative endpoint."""
        try:
            answer = Prompt.ask(
                "Enter the base URL for the API", default=default, console=console
            )
        except EOFError:
            return default
        return (answer or default).strip().rstrip("/")

    def ask_authorization(self) -> str | None:
        """Ask whether the endpoint needs auth and, if so, the header value."""
        try:
            if not Confirm.ask(
                "Does this endpoint require authentication?", default=False, console=console
            ):
                return None
            value = Prompt.ask(
                "Enter the Authorization header value (e.g. Bearer <token>)",
                default="",
                show_default=False,
                console=console,
            )
        except EOFError:
            return None
        return value.strip() or None

    def ask_sample_body(self, method: HTTPMethod) -> str | None:
        """Ask for an optional inline JSON body for POST/PUT sample requests."""
        try:
            value = Prompt.ask(
                f"Sample JSON body for the {method.value} request (Enter to send none)",
                default="",
                show_default=False,
                console=console,
            )
        except EOFError:
            return None
        return value.strip() or None

    def confirm_generation(self, artifacts: list[Artifact]) -> bool:
        """Show the planned files and ask whether to write them."""
        console.print(f"[bold]{len(artifacts)} files will be generated:[/bold]")
        for artifact in artifacts:
            console.print(f"  [dim]{artifact.layer.value:<24}[/dim] {artifact.relative_path}")
        try:
            return Confirm.ask("Generate these files?", default=True, console=console)
        except EOFError:
            return False

    def confirm_overwrite(self, path: Path) -> bool:
        """Ask whether an existing, different file may be replaced."""
        try:
            return Confirm.ask(
                f"File {path} already contains different content. Overwrite?",
                default=False,
                console=console,
            )
        except EOFError:
            return False
