"""Shared pytest fixtures for the clean architecture generator test suite.

Provides reusable fixtures for:
- Sample payloads and the features they belong to
- Scripted operator prompts and sample providers
- Temporary output trees and Flutter projects
"""

from __future__ import annotations

import json
import textwrap
from pathlib import Path
from typing import Any

import pytest

from archgen.config import GeneratorConfig
from archgen.scaffolder.models import Artifact, FeatureDescriptor, HTTPMethod
from archgen.schema.inferencer import SchemaInferencer
from archgen.schema.naming import NameResolver


# ---------------------------------------------------------------------------
# Fakes
# ---------------------------------------------------------------------------


class ScriptedPrompts:
    """Operator prompts answering from a script and recording every call."""

    def __init__(
        self,
        base_url: str = "https://api.example.com",
        authorization: str | None = None,
        sample_body: str | None = None,
        generate: bool = True,
        overwrite: bool = False,
    ) -> None:
        self.base_url = base_url
        self.authorization = authorization
        self.sample_body = sample_body
        self.generate = generate
        self.overwrite = overwrite
        self.calls: list[str] = []
        self.overwrite_paths: list[Path] = []

    def ask_base_url(self, default: str) -> str:
        self.calls.append("base_url")
        return self.base_url

    def ask_authorization(self) -> str | None:
        self.calls.append("authorization")
        return self.authorization

    def ask_sample_body(self, method: HTTPMethod) -> str | None:
        self.calls.append("sample_body")
        return self.sample_body

    def confirm_generation(self, artifacts: list[Artifact]) -> bool:
        self.calls.append("confirm_generation")
        return self.generate

    def confirm_overwrite(self, path: Path) -> bool:
        self.calls.append("confirm_overwrite")
        self.overwrite_paths.append(path)
        return self.overwrite


class StaticSampleProvider:
    """Sample provider returning a fixed payload text."""

    def __init__(self, payload: Any) -> None:
        self.text = payload if isinstance(payload, str) else json.dumps(payload)
        self.features: list[FeatureDescriptor] = []

    async def provide_sample(self, feature: FeatureDescriptor) -> str:
        self.features.append(feature)
        return self.text


# ---------------------------------------------------------------------------
# Payloads & features
# ---------------------------------------------------------------------------


@pytest.fixture
def users_payload() -> dict[str, Any]:
    """Flat payload with scalar and list-of-scalar fields."""
    return {"id": 1, "name": "Ann", "tags": ["x", "y"]}


@pytest.fixture
def nested_payload() -> dict[str, Any]:
    """Payload with a nested record and a list of records."""
    return {
        "id": 7,
        "active": True,
        "score": 4.5,
        "meta": {"page": 1, "total": 20},
        "items": [{"sku": "A-1", "price": 9.99}],
        "empty": [],
        "note": None,
    }


@pytest.fixture
def users_feature() -> FeatureDescriptor:
    """GET /api/users/profile on the example host."""
    return FeatureDescriptor.from_endpoint(
        "/api/users/profile", HTTPMethod.GET, base_url="https://api.example.com"
    )


@pytest.fixture
def infer():
    """Infer the schema of a payload for a feature name."""

    def _infer(payload: Any, feature_name: str = "users"):
        return SchemaInferencer(NameResolver(feature_name)).infer(payload)

    return _infer


# ---------------------------------------------------------------------------
# Collaborators
# ---------------------------------------------------------------------------


@pytest.fixture
def prompts() -> ScriptedPrompts:
    """Prompts that accept generation and decline overwrites."""
    return ScriptedPrompts()


@pytest.fixture
def make_prompts():
    """Factory for ``ScriptedPrompts`` with custom answers."""
    return ScriptedPrompts


@pytest.fixture
def make_provider():
    """Factory for ``StaticSampleProvider`` serving a given payload."""
    return StaticSampleProvider


@pytest.fixture
def config(tmp_path: Path) -> GeneratorConfig:
    """Configuration writing under a temporary output directory."""
    return GeneratorConfig(
        output_dir=tmp_path / "out",
        base_url="https://api.example.com",
        auth_token="Bearer test-token",
    )


# ---------------------------------------------------------------------------
# Flutter project
# ---------------------------------------------------------------------------


@pytest.fixture
def flutter_project(tmp_path: Path) -> Path:
    """Flutter project directory with a minimal pubspec.yaml."""
    project = tmp_path / "my_app"
    project.mkdir()
    (project / "pubspec.yaml").write_text(
        textwrap.dedent("""\
            name: my_app
            description: A new Flutter project.

            environment:
              sdk: '>=3.0.0 <4.0.0'

            dependencies:
              flutter:
                sdk: flutter
              dio: ^5.0.0

            dev_dependencies:
              flutter_test:
                sdk: flutter
        """),
        encoding="utf-8",
    )
    return project
