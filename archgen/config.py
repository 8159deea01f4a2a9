"""Generator configuration.

Centralised, typed configuration for one generation run. Settings use a
Pydantic v2 model so they are validated at construction time and can be
built from CLI flags or environment variables without boiler-plate.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field


# Dependencies the generated Dart code needs in the target pubspec.yaml.
DEFAULT_DEPENDENCIES: dict[str, str] = {
    "dio": "^5.3.2",
    "dartz": "^0.10.1",
    "equatable": "^2.0.5",
    "get": "^4.6.6",
    "connectivity_plus": "^4.0.2",
}

DEFAULT_BASE_URL = "https://api.example.com"


class GeneratorConfig(BaseModel):
    """Settings for a single generator run.

    Instances are created once by the CLI entry point (or by tests) and
    passed to ``GenerationPipeline``.
    """

    output_dir: Path = Field(default=Path("./generated"), description="Root of the generated tree")
    project_path: Path | None = Field(
        default=None, description="Flutter project whose pubspec.yaml gets the dependencies"
    )
    base_url: str | None = Field(
        default=None, description="Base URL used when the endpoint is a relative path"
    )
    auth_token: str | None = Field(
        default=None, description="Authorization header value used for the sample fetch"
    )
    timeout: int = Field(default=30, ge=1, description="Sample fetch timeout in seconds")
    assume_yes: bool = Field(
        default=False, description="Skip the pre-generation confirmation"
    )
    overwrite_all: bool = Field(
        default=False, description="Overwrite conflicting files without asking"
    )
    required_dependencies: dict[str, str] = Field(
        default_factory=lambda: dict(DEFAULT_DEPENDENCIES),
        description="Dependency name -> minimum version constraint",
    )

    @classmethod
    def from_env(cls, **overrides: Any) -> "GeneratorConfig":
        """Build a ``GeneratorConfig`` from environment variables.

        Recognised variables (all optional):
            ARCHGEN_OUTPUT_DIR, ARCHGEN_PROJECT_PATH, ARCHGEN_BASE_URL,
            ARCHGEN_TOKEN, ARCHGEN_TIMEOUT.

        Keyword *overrides* win over the environment; ``None`` values are
        ignored so unset CLI flags do not mask environment settings.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("ARCHGEN_OUTPUT_DIR"):
            kwargs["output_dir"] = Path(os.environ["ARCHGEN_OUTPUT_DIR"])
        if os.environ.get("ARCHGEN_PROJECT_PATH"):
            kwargs["project_path"] = Path(os.environ["ARCHGEN_PROJECT_PATH"])
        if os.environ.get("ARCHGEN_BASE_URL"):
            kwargs["base_url"] = os.environ["ARCHGEN_BASE_URL"]
        if os.environ.get("ARCHGEN_TOKEN"):
            kwargs["auth_token"] = os.environ["ARCHGEN_TOKEN"]
        if os.environ.get("ARCHGEN_TIMEOUT"):
            kwargs["timeout"] = int(os.environ["ARCHGEN_TIMEOUT"])

        kwargs.update({key: value for key, value in overrides.items() if value is not None})
        return cls(**kwargs)
