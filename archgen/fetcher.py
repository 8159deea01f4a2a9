"""Sample payload acquisition.

``HttpSampleProvider`` performs the one HTTP request a run needs: it calls
the endpoint with the operator-supplied auth header and optional JSON body
and returns the raw response text.  ``parse_sample`` turns that text into
the JSON value the schema inferencer consumes.

Any failure (connection, timeout, non-success status, non-JSON body) is a
``FetchError``; the pipeline aborts before writing anything.
"""

from __future__ import annotations

import json
from typing import Any

import httpx
from pydantic import BaseModel, Field

from archgen.config import GeneratorConfig
from archgen.prompts import OperatorPrompts
from archgen.scaffolder.models import FeatureDescriptor, HTTPMethod
from archgen.schema.models import JSONValue
from archgen.utils import load_json_text

# Key a top-level JSON array is wrapped under before inference.
LIST_ROOT_KEY = "data"


class FetchError(Exception):
    """Raised when the sample payload cannot be obtained or parsed."""


class SampleRequest(BaseModel):
    """The request used to fetch a sample payload."""

    url: str = Field(..., description="Absolute URL")
    method: HTTPMethod = Field(default=HTTPMethod.GET)
    headers: dict[str, str] = Field(default_factory=dict)
    body: Any = Field(default=None, description="JSON body for POST/PUT")


class HttpSampleProvider:
    """Fetches the sample payload over HTTP with ``httpx``.

    Attributes:
        config: Run configuration (auth token, timeout).
        prompts: Asks for auth and body when the configuration lacks them.
    """

    def __init__(self, config: GeneratorConfig, prompts: OperatorPrompts) -> None:
        self.config = config
        self.prompts = prompts

    def build_request(self, feature: FeatureDescriptor) -> SampleRequest:
        """Collect everything needed to call *feature*'s endpoint.

        Raises:
            FetchError: If the feature has no base URL or the body typed
                by the operator is not JSON.
        """
        url = feature.full_url
        if url is None:
            raise FetchError(f"No base URL known for {feature.endpoint_path}")

        headers = {"Accept": "application/json"}
        authorization = self.config.auth_token or self.prompts.ask_authorization()
        if authorization:
            if " " not in authorization:
                authorization = f"Bearer {authorization}"
            headers["Authorization"] = authorization

        body: JSONValue = None
        if feature.http_method in (HTTPMethod.POST, HTTPMethod.PUT):
            raw_body = self.prompts.ask_sample_body(feature.http_method)
            if raw_body:
                try:
                    body = load_json_text(raw_body)
                except json.JSONDecodeError as exc:
                    raise FetchError(f"Sample body is not valid JSON: {exc}") from exc

        return SampleRequest(url=url, method=feature.http_method, headers=headers, body=body)

    async def provide_sample(self, feature: FeatureDescriptor) -> str:
        """Call the endpoint and return the response body text.

        Raises:
            FetchError: On connection errors, timeouts and non-2xx statuses.
        """
        request = self.build_request(feature)
        kwargs: dict = {"headers": request.headers}
        if request.body is not None:
            kwargs["json"] = request.body

        try:
            async with httpx.AsyncClient(
                timeout=httpx.Timeout(self.config.timeout, connect=10.0),
                follow_redirects=True,
            ) as client:
                response = await client.request(request.method.value, request.url, **kwargs)
                response.raise_for_status()
                return response.text
        except httpx.ConnectError as exc:
            raise FetchError(f"Cannot connect to {request.url}: {exc}") from exc
        except httpx.TimeoutException as exc:
            raise FetchError(
                f"Request to {request.url} timed out after {self.config.timeout}s"
            ) from exc
        except httpx.HTTPStatusError as exc:
            raise FetchError(
                f"{request.url} returned HTTP {exc.response.status_code}: "
                f"{exc.response.text[:500]}"
            ) from exc
        except httpx.HTTPError as exc:
            raise FetchError(f"Request to {request.url} failed: {exc}") from exc


def parse_sample(text: str) -> tuple[dict[str, JSONValue], bool]:
    """Parse a sample payload into the object the schema is inferred from.

    A top-level array is wrapped as ``{"data": [...]}``.

    Returns:
        ``(payload, root_was_list)``.

    Raises:
        FetchError: If *text* is not JSON or its root is a scalar.
    """
    try:
        value = load_json_text(text)
    except json.JSONDecodeError as exc:
        raise FetchError(f"Could not parse response as JSON: {exc}") from exc

    if isinstance(value, dict):
        return value, False
    if isinstance(value, list):
        return {LIST_ROOT_KEY: value}, True
    raise FetchError(f"Unexpected response format: {type(value).__name__}")
