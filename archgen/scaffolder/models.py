"""Pydantic v2 models describing one generation run.

``FeatureDescriptor`` is built once from the operator-confirmed endpoint
and stays immutable for the run.  ``Artifact`` is one planned output file;
its ``content`` is filled in by the template renderer.
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Any
from urllib.parse import urlsplit

from pydantic import BaseModel, ConfigDict, Field

from archgen.utils import split_words, to_camel, to_pascal, to_snake

DEFAULT_FEATURE = "default_feature"
DEFAULT_ENDPOINT_CONSTANT = "generatedEndpoint"


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class UnsupportedMethodError(ValueError):
    """Raised for an HTTP method other than GET, POST, PUT or DELETE."""


class HTTPMethod(str, Enum):
    """HTTP methods the generated datasource can be wired for."""
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"

    @classmethod
    def parse(cls, value: str) -> HTTPMethod:
        """Case-insensitive lookup raising ``UnsupportedMethodError``."""
        try:
            return cls(value.strip().upper())
        except ValueError:
            raise UnsupportedMethodError(
                f"Unsupported HTTP method: {value!r} (expected GET, POST, PUT or DELETE)"
            ) from None


class Layer(str, Enum):
    """Architectural layer an artifact belongs to."""
    NETWORK_CORE = "network-core"
    CORE_SUPPORT = "core-support"
    DATA_DATASOURCE = "data-datasource"
    DATA_MODEL = "data-model"
    DATA_REPOSITORY_IMPL = "data-repository-impl"
    DOMAIN_ENTITY = "domain-entity"
    DOMAIN_REPOSITORY_IFACE = "domain-repository-iface"
    DOMAIN_USECASE = "domain-usecase"
    DOMAIN_PARAMS = "domain-params"


# ---------------------------------------------------------------------------
# Feature descriptor
# ---------------------------------------------------------------------------

class FeatureDescriptor(BaseModel):
    """The feature a run generates code for."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1, description="snake_case name used in file paths")
    pascal_name: str = Field(..., min_length=1, description="PascalCase name used in type names")
    endpoint_path: str = Field(..., description="Endpoint path, e.g. '/api/users/profile'")
    http_method: HTTPMethod = Field(default=HTTPMethod.GET)
    base_url: str | None = Field(default=None, description="Scheme and host, if known")
    query: str = Field(default="", description="Query string sent with the sample fetch, without '?'")

    @classmethod
    def from_endpoint(
        cls,
        endpoint: str,
        method: str | HTTPMethod = HTTPMethod.GET,
        base_url: str | None = None,
    ) -> FeatureDescriptor:
        """Build a descriptor from an endpoint path or absolute URL.

        For an absolute URL the scheme and host become ``base_url``.  A query
        string is kept apart in ``query``: it is sent with the sample fetch
        but never reaches the feature name or the registry constant.  A
        fragment is dropped.
        """
        http_method = method if isinstance(method, HTTPMethod) else HTTPMethod.parse(method)
        endpoint = endpoint.strip()

        if re.match(r"^https?://", endpoint, flags=re.IGNORECASE):
            parts = urlsplit(endpoint)
            base_url = f"{parts.scheme}://{parts.netloc}"
            path = parts.path or "/"
            query = parts.query
        else:
            path, _, query = endpoint.split("#", 1)[0].partition("?")
            path = path if path.startswith("/") else f"/{path}"

        name = extract_feature_name(path)
        return cls(
            name=name,
            pascal_name=to_pascal(name),
            endpoint_path=path,
            http_method=http_method,
            base_url=base_url.rstrip("/") if base_url else None,
            query=query,
        )

    @property
    def endpoint_constant(self) -> str:
        """Name of the registry constant holding ``endpoint_path``."""
        return endpoint_constant_name(self.endpoint_path)

    @property
    def full_url(self) -> str | None:
        if not self.base_url:
            return None
        url = f"{self.base_url}{self.endpoint_path}"
        return f"{url}?{self.query}" if self.query else url


def extract_feature_name(path: str) -> str:
    """Return the snake_case feature name for an endpoint path.

    The feature is the first non-empty segment that is not ``api``::

        extract_feature_name("/api/users/profile") -> "users"
        extract_feature_name("/order-items")       -> "order_items"
    """
    for segment in path.split("/"):
        if segment and segment.lower() != "api":
            name = to_snake(segment)
            if name:
                return name if not name[0].isdigit() else f"feature_{name}"
    return DEFAULT_FEATURE


def endpoint_constant_name(path: str) -> str:
    """Camel-case an endpoint path into a registry constant name.

    Every segment after the first is joined in camelCase; a single segment
    is camel-cased on its own::

        endpoint_constant_name("/api/users/profile") -> "usersProfile"
        endpoint_constant_name("/users")             -> "users"
    """
    segments = [s for s in path.strip("/").split("/") if s]
    if len(segments) > 1:
        segments = segments[1:]
    words = [word for segment in segments for word in split_words(segment)]
    name = to_camel("_".join(words))
    if not name:
        return DEFAULT_ENDPOINT_CONSTANT
    if name[0].isdigit():
        return f"endpoint{name[0].upper()}{name[1:]}"
    return name


# ---------------------------------------------------------------------------
# Artifact
# ---------------------------------------------------------------------------

class Artifact(BaseModel):
    """One planned output file.

    ``relative_path`` is POSIX-style and relative to the output root
    (e.g. ``lib/core/network/api_constants.dart``).  ``template`` and
    ``context`` drive rendering; ``content`` is empty until rendered.
    """

    relative_path: str
    layer: Layer
    template: str
    context: dict[str, Any] = Field(default_factory=dict)
    content: str = ""
