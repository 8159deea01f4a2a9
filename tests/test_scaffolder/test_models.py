"""Unit tests for run models (archgen.scaffolder.models).

Covers:
- HTTPMethod parsing
- Feature name and endpoint constant extraction
- FeatureDescriptor.from_endpoint for paths and absolute URLs
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from archgen.scaffolder.models import (
    Artifact,
    FeatureDescriptor,
    HTTPMethod,
    Layer,
    UnsupportedMethodError,
    endpoint_constant_name,
    extract_feature_name,
)


pytestmark = pytest.mark.unit


# ---------------------------------------------------------------------------
# HTTPMethod
# ---------------------------------------------------------------------------


class TestHTTPMethod:
    @pytest.mark.parametrize("value", ["get", "GET", " Post ", "put", "delete"])
    def test_parse_case_insensitive(self, value):
        assert HTTPMethod.parse(value).value == value.strip().upper()

    def test_parse_unsupported(self):
        with pytest.raises(UnsupportedMethodError, match="PATCH"):
            HTTPMethod.parse("PATCH")

    def test_unsupported_is_value_error(self):
        assert issubclass(UnsupportedMethodError, ValueError)


# ---------------------------------------------------------------------------
# Name extraction
# ---------------------------------------------------------------------------


class TestExtractFeatureName:
    @pytest.mark.parametrize(
        "path, expected",
        [
            ("/api/users/profile", "users"),
            ("/users", "users"),
            ("/API/orders", "orders"),
            ("/order-items/1", "order_items"),
            ("/api/userProfile", "user_profile"),
            ("/api", "default_feature"),
            ("/", "default_feature"),
            ("/v1/users", "v1"),
            ("/2024/reports", "feature_2024"),
        ],
    )
    def test_extract(self, path, expected):
        assert extract_feature_name(path) == expected


class TestEndpointConstantName:
    @pytest.mark.parametrize(
        "path, expected",
        [
            ("/api/users/profile", "usersProfile"),
            ("/users", "users"),
            ("/api/order-items", "orderItems"),
            ("/api/users/{id}/posts", "usersIdPosts"),
            ("/", "generatedEndpoint"),
            ("/api/2fa", "endpoint2fa"),
        ],
    )
    def test_constant(self, path, expected):
        assert endpoint_constant_name(path) == expected


# ---------------------------------------------------------------------------
# FeatureDescriptor
# ---------------------------------------------------------------------------


class TestFeatureDescriptor:
    def test_from_relative_path(self):
        feature = FeatureDescriptor.from_endpoint(
            "api/users/profile", "get", base_url="https://api.example.com/"
        )
        assert feature.name == "users"
        assert feature.pascal_name == "Users"
        assert feature.endpoint_path == "/api/users/profile"
        assert feature.http_method is HTTPMethod.GET
        assert feature.base_url == "https://api.example.com"
        assert feature.endpoint_constant == "usersProfile"
        assert feature.full_url == "https://api.example.com/api/users/profile"

    def test_from_absolute_url(self):
        feature = FeatureDescriptor.from_endpoint(
            "https://shop.example.com:8443/api/orders?page=1", HTTPMethod.POST
        )
        assert feature.base_url == "https://shop.example.com:8443"
        assert feature.endpoint_path == "/api/orders"
        assert feature.name == "orders"
        assert feature.http_method is HTTPMethod.POST

    def test_absolute_url_keeps_query(self):
        feature = FeatureDescriptor.from_endpoint("https://api.x.com/api/users?page=2&limit=5")
        assert feature.query == "page=2&limit=5"
        assert feature.endpoint_path == "/api/users"
        assert feature.full_url == "https://api.x.com/api/users?page=2&limit=5"

    def test_relative_query_kept_out_of_names(self):
        feature = FeatureDescriptor.from_endpoint("/api/users?page=2#top", base_url="https://a.b")
        assert feature.name == "users"
        assert feature.endpoint_path == "/api/users"
        assert feature.endpoint_constant == "users"
        assert feature.query == "page=2"
        assert feature.full_url == "https://a.b/api/users?page=2"

    def test_fragment_dropped(self):
        feature = FeatureDescriptor.from_endpoint("orders#section", base_url="https://a.b")
        assert feature.endpoint_path == "/orders"
        assert feature.query == ""
        assert feature.full_url == "https://a.b/orders"

    def test_absolute_url_overrides_base_url(self):
        feature = FeatureDescriptor.from_endpoint(
            "http://other.test/items", base_url="https://api.example.com"
        )
        assert feature.base_url == "http://other.test"

    def test_no_base_url(self):
        feature = FeatureDescriptor.from_endpoint("/users")
        assert feature.base_url is None
        assert feature.full_url is None

    def test_unsupported_method(self):
        with pytest.raises(UnsupportedMethodError):
            FeatureDescriptor.from_endpoint("/users", "OPTIONS")

    def test_frozen(self, users_feature: FeatureDescriptor):
        with pytest.raises(ValidationError):
            users_feature.name = "other"


class TestArtifact:
    def test_defaults(self):
        artifact = Artifact(
            relative_path="lib/a.dart", layer=Layer.DOMAIN_ENTITY, template="x.j2"
        )
        assert artifact.context == {}
        assert artifact.content == ""
