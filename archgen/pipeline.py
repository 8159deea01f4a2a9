"""Clean architecture generation pipeline.

Drives one run for one endpoint:

1. FEATURE  -- Build the feature descriptor from the endpoint and method.
2. FETCH    -- Obtain the sample payload (the only I/O wait of the run).
3. INFER    -- Infer the schema tree and its type names.
4. PLAN     -- Plan the ordered artifact list; the operator may decline here.
5. WRITE    -- Render each artifact and merge it into the output tree.
6. MANIFEST -- Register the required dependencies in ``pubspec.yaml``.

Usage::

    python -m archgen.pipeline -e /api/users/profile -m GET -o ./my_app
    archgen -e https://api.example.com/api/orders -m POST -p ./my_app
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from collections.abc import Awaitable, Callable
from pathlib import Path
from typing import Protocol

from pydantic import BaseModel, Field

from archgen.config import DEFAULT_BASE_URL, GeneratorConfig
from archgen.fetcher import FetchError, HttpSampleProvider, parse_sample
from archgen.prompts import OperatorPrompts
from archgen.scaffolder.manifest import ManifestParseError, update_pubspec
from archgen.scaffolder.models import FeatureDescriptor, HTTPMethod, UnsupportedMethodError
from archgen.scaffolder.planner import ArtifactPlanner
from archgen.scaffolder.templates import TemplateRenderer
from archgen.scaffolder.writer import MergeWriter, WriteError, WriteOutcome
from archgen.schema.inferencer import SchemaInferencer
from archgen.schema.naming import NameResolver
from archgen.utils import (
    console,
    print_error,
    print_header,
    print_info,
    print_success,
    print_summary_table,
    print_warning,
)


class SampleProvider(Protocol):
    """Anything that can produce the sample payload text for a feature."""

    def provide_sample(self, feature: FeatureDescriptor) -> Awaitable[str]: ...


# ---------------------------------------------------------------------------
# Run result
# ---------------------------------------------------------------------------


class RunResult(BaseModel):
    """Outcome of one pipeline run."""

    success: bool = Field(default=False)
    aborted: bool = Field(default=False, description="Operator declined before writing")
    feature: FeatureDescriptor | None = Field(default=None)
    outcomes: dict[str, WriteOutcome] = Field(
        default_factory=dict, description="relative path -> write outcome, in plan order"
    )
    dependencies_added: list[str] = Field(default_factory=list)
    error: str | None = Field(default=None)


# ---------------------------------------------------------------------------
# Pipeline
# ---------------------------------------------------------------------------


class GenerationPipeline:
    """Runs the fetch -> infer -> plan -> render -> write sequence.

    Attributes:
        config: Run configuration.
        prompts: Interactive collaborator for base URL, confirmations, etc.
        sample_provider: Produces the sample payload text.
        renderer: Jinja2 renderer for planned artifacts.
    """

    def __init__(
        self,
        config: GeneratorConfig,
        prompts: OperatorPrompts | None = None,
        sample_provider: SampleProvider | None = None,
        renderer: TemplateRenderer | None = None,
    ) -> None:
        self.config = config
        self.prompts = prompts or OperatorPrompts()
        self.sample_provider = sample_provider or HttpSampleProvider(config, self.prompts)
        self.renderer = renderer or TemplateRenderer()
        self.planner = ArtifactPlanner(client_timeout=config.timeout)

    # ------------------------------------------------------------------
    # Main entry point
    # ------------------------------------------------------------------

    async def run(self, endpoint: str, method: str = "GET") -> RunResult:
        """Generate the layered files for *endpoint*.

        Failures are reported on the console and returned in the result;
        only unexpected exceptions propagate.
        """
        result = RunResult()

        # 1. Feature descriptor
        try:
            http_method = HTTPMethod.parse(method)
        except UnsupportedMethodError as exc:
            return self._fail(result, str(exc))
        feature = FeatureDescriptor.from_endpoint(
            endpoint, http_method, base_url=self._resolve_base_url(endpoint)
        )
        result.feature = feature
        print_info(f"Feature: {feature.name} ({feature.http_method.value} {feature.endpoint_path})")

        # 2. Sample payload
        print_header("Fetching API response")
        try:
            sample = await self.sample_provider.provide_sample(feature)
            payload, root_was_list = parse_sample(sample)
        except FetchError as exc:
            print_warning("Please make sure the endpoint is accessible and the method is correct.")
            return self._fail(result, f"Could not fetch API response: {exc}")

        # 3-4. Schema and plan
        inferencer = SchemaInferencer(NameResolver(feature.name))
        schema = inferencer.infer(payload)
        artifacts = self.planner.plan(schema, feature, root_was_list=root_was_list)

        if not self.config.assume_yes and not self.prompts.confirm_generation(artifacts):
            result.aborted = True
            print_warning("Generation cancelled; no files were written.")
            return result

        # 5. Render and write
        print_header("Writing files")
        writer = MergeWriter(self.config.output_dir, self._overwrite_policy())
        try:
            for artifact in self.renderer.render_all(artifacts):
                result.outcomes[artifact.relative_path] = writer.write_artifact(artifact)
        except WriteError as exc:
            self._print_outcomes(result)
            return self._fail(result, str(exc))

        # 6. Dependency manifest
        if self.config.project_path is not None:
            result.dependencies_added = self._update_manifest(self.config.project_path)

        result.success = True
        self._print_outcomes(result)
        print_success(f"Generated clean architecture for endpoint: {feature.endpoint_path}")
        return result

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _resolve_base_url(self, endpoint: str) -> str | None:
        """Base URL for a relative endpoint; ``None`` for absolute URLs."""
        if endpoint.strip().lower().startswith(("http://", "https://")):
            return None
        if self.config.base_url:
            return self.config.base_url
        return self.prompts.ask_base_url(DEFAULT_BASE_URL)

    def _overwrite_policy(self) -> Callable[[Path], bool]:
        if self.config.overwrite_all:
            return lambda path: True
        return self.prompts.confirm_overwrite

    def _update_manifest(self, project_path: Path) -> list[str]:
        required = self.config.required_dependencies
        try:
            added = update_pubspec(project_path, required)
        except FileNotFoundError as exc:
            print_warning(f"{exc}. Skipping dependency update.")
            return []
        except (ManifestParseError, OSError) as exc:
            print_error(f"Error updating pubspec.yaml: {exc}")
            return []

        if added:
            for name in added:
                print_info(f"Adding dependency: {name}: {required[name]}")
            print_success("Updated pubspec.yaml with required dependencies")
        else:
            print_info("All required dependencies already exist in pubspec.yaml")
        return added

    @staticmethod
    def _fail(result: RunResult, message: str) -> RunResult:
        print_error(message)
        result.error = message
        return result

    @staticmethod
    def _print_outcomes(result: RunResult) -> None:
        if not result.outcomes:
            return
        counts: dict[str, str] = {}
        for outcome in WriteOutcome:
            total = sum(1 for o in result.outcomes.values() if o is outcome)
            if total:
                counts[outcome.value.capitalize()] = str(total)
        print_summary_table(counts, title="Files")


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="archgen",
        description="Clean Architecture Generator -- Flutter data/domain layers from an API endpoint",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  archgen -e /api/users/profile\n"
            "  archgen -e https://api.example.com/api/orders -m POST -o ./my_app -p ./my_app\n"
        ),
    )
    parser.add_argument("--endpoint", "-e", help="API endpoint path or URL to generate code for")
    parser.add_argument(
        "--method", "-m",
        default="GET",
        type=str.upper,
        choices=["GET", "POST", "PUT", "DELETE"],
        help="HTTP method (default: GET)",
    )
    parser.add_argument(
        "--output", "-o",
        default=None,
        help="Output directory for generated files (default: ./generated)",
    )
    parser.add_argument(
        "--project-path", "-p",
        default=None,
        help="Flutter project whose pubspec.yaml receives the dependencies",
    )
    parser.add_argument("--base-url", default=None, help="Base URL for a relative endpoint")
    parser.add_argument("--token", default=None, help="Authorization value for the sample request")
    parser.add_argument(
        "--yes", "-y",
        action="store_true",
        help="Skip the confirmation before files are written",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for ``archgen`` / ``python -m archgen.pipeline``."""
    parser = build_parser()
    arguments = sys.argv[1:] if argv is None else argv
    if not arguments:
        parser.print_help()
        return

    args = parser.parse_args(arguments)
    if not args.endpoint:
        console.print(
            "[bold red]Error:[/bold red] Endpoint is required. "
            "Use -e or --endpoint to specify the API endpoint."
        )
        parser.print_usage()
        return

    config = GeneratorConfig.from_env(
        output_dir=Path(args.output) if args.output else None,
        project_path=Path(args.project_path) if args.project_path else None,
        base_url=args.base_url,
        auth_token=args.token,
        assume_yes=args.yes or None,
    )

    console.print("[bold]Clean Architecture Generator[/bold]")
    console.print(f"Analyzing endpoint: {args.endpoint}")

    pipeline = GenerationPipeline(config)
    result = asyncio.run(pipeline.run(args.endpoint, args.method))

    if result.success:
        console.print("\n[bold green]Code generation completed successfully![/bold green]")
        console.print(f"Files generated in: {config.output_dir}")


if __name__ == "__main__":
    main()
