"""Tests for the Dart template renderer (archgen.scaffolder.templates).

Covers:
- Renderer construction and strict undefined handling
- Rendering every planned artifact
- Entity and model classes for flat and nested payloads
- Datasource wiring per HTTP method
- Endpoint registry and HTTP client settings
"""

from __future__ import annotations

from pathlib import Path

import pytest
from jinja2 import TemplateNotFound, UndefinedError

from archgen.scaffolder.models import Artifact, FeatureDescriptor, HTTPMethod, Layer
from archgen.scaffolder.planner import ArtifactPlanner
from archgen.scaffolder.templates import TemplateRenderer


pytestmark = pytest.mark.unit


@pytest.fixture
def renderer() -> TemplateRenderer:
    return TemplateRenderer()


@pytest.fixture
def render_plan(renderer, infer):
    """Plan and render a payload; returns ``{relative path: rendered artifact}``."""

    def _render(payload, feature: FeatureDescriptor, root_was_list: bool = False):
        artifacts = ArtifactPlanner(client_timeout=30).plan(
            infer(payload, feature.name), feature, root_was_list=root_was_list
        )
        rendered = renderer.render_all(artifacts)
        return {a.relative_path: a for a in rendered}

    return _render


def _by_layer(rendered: dict[str, Artifact], layer: Layer) -> str:
    return next(a.content for a in rendered.values() if a.layer is layer)


# ---------------------------------------------------------------------------
# Renderer basics
# ---------------------------------------------------------------------------


class TestTemplateRenderer:
    def test_default_template_dir(self, renderer: TemplateRenderer):
        assert renderer.template_dir.is_dir()
        assert renderer.template_dir.name == "templates"

    def test_dart_string_filter_registered(self, renderer: TemplateRenderer):
        assert "dart_string" in renderer.env.filters

    def test_undefined_variable_raises(self, renderer: TemplateRenderer):
        with pytest.raises(UndefinedError):
            renderer.render("feature/domain/params.dart.j2", {})

    def test_missing_template_dir(self, tmp_path: Path):
        with pytest.raises(TemplateNotFound):
            TemplateRenderer(tmp_path).render("feature/domain/params.dart.j2", {})

    def test_render_all_keeps_order(self, renderer, infer, users_payload, users_feature):
        artifacts = ArtifactPlanner().plan(infer(users_payload), users_feature)
        rendered = renderer.render_all(artifacts)
        assert [a.relative_path for a in rendered] == [a.relative_path for a in artifacts]
        assert all(a.content for a in rendered)
        assert all(a.content == "" for a in artifacts)


# ---------------------------------------------------------------------------
# Entities and models
# ---------------------------------------------------------------------------


class TestRecordLayers:
    def test_flat_entity(self, render_plan, users_payload, users_feature):
        entity = _by_layer(render_plan(users_payload, users_feature), Layer.DOMAIN_ENTITY)
        assert "import 'package:equatable/equatable.dart';" in entity
        assert "class UsersResponseEntity extends Equatable {" in entity
        assert "  final int id;\n  final String name;\n  final List<String> tags;\n" in entity
        assert "    required this.id,\n    required this.name,\n    required this.tags,\n" in entity
        assert "List<Object?> get props => [id, name, tags];" in entity

    def test_flat_model(self, render_plan, users_payload, users_feature):
        model = _by_layer(render_plan(users_payload, users_feature), Layer.DATA_MODEL)
        assert "import '../../../../core/utils/data_parser.dart';" in model
        assert "import '../../domain/entities/users_response_entity.dart';" in model
        assert "class UsersResponseModel extends UsersResponseEntity {" in model
        assert "required super.tags," in model
        assert "factory UsersResponseModel.fromJson(Map<String, dynamic> json) {" in model
        assert "id: safeParse<int>(json['id'], 'id')," in model
        assert "tags: safeParse<List<String>>(json['tags'], 'tags')," in model

    def test_empty_list_field(self, render_plan, users_feature):
        rendered = render_plan({"items": []}, users_feature)
        assert "final List<dynamic> items;" in _by_layer(rendered, Layer.DOMAIN_ENTITY)
        assert "safeParse<List<dynamic>>(json['items'], 'items')" in _by_layer(
            rendered, Layer.DATA_MODEL
        )

    def test_nested_record(self, render_plan, users_feature):
        rendered = render_plan({"meta": {"page": 1}}, users_feature)
        entity = _by_layer(rendered, Layer.DOMAIN_ENTITY)
        model = _by_layer(rendered, Layer.DATA_MODEL)

        assert entity.index("class MetaEntity") < entity.index("class UsersResponseEntity")
        assert "final MetaEntity? meta;" in entity
        assert "final int page;" in entity

        assert model.index("class MetaModel") < model.index("class UsersResponseModel")
        assert "class MetaModel extends MetaEntity {" in model
        assert (
            "meta: json['meta'] != null ? MetaModel.fromJson("
            "json['meta'] as Map<String, dynamic>) : null,"
        ) in model

    def test_list_of_records(self, render_plan, users_feature):
        model = _by_layer(
            render_plan({"items": [{"sku": "A"}]}, users_feature), Layer.DATA_MODEL
        )
        assert "class ItemsModel extends ItemsEntity {" in model
        assert "ItemsModel.fromJson(e0 as Map<String, dynamic>)" in model

    def test_empty_record(self, render_plan, users_feature):
        rendered = render_plan({}, users_feature)
        assert "const UsersResponseEntity();" in _by_layer(rendered, Layer.DOMAIN_ENTITY)
        assert "List<Object?> get props => [];" in _by_layer(rendered, Layer.DOMAIN_ENTITY)
        assert "return const UsersResponseModel();" in _by_layer(rendered, Layer.DATA_MODEL)

    def test_repeated_names_both_emitted(self, render_plan, users_feature):
        payload = {"a": {"info": {"x": 1}}, "b": {"info": {"y": "s"}}}
        entity = _by_layer(render_plan(payload, users_feature), Layer.DOMAIN_ENTITY)
        assert entity.count("class InfoEntity extends Equatable") == 2


# ---------------------------------------------------------------------------
# Datasource
# ---------------------------------------------------------------------------


class TestDatasource:
    def _datasource(self, render_plan, method: HTTPMethod, root_was_list: bool = False) -> str:
        feature = FeatureDescriptor.from_endpoint(
            "/api/users/profile", method, base_url="https://api.example.com"
        )
        rendered = render_plan({"id": 1}, feature, root_was_list=root_was_list)
        return _by_layer(rendered, Layer.DATA_DATASOURCE)

    def test_get_uses_query_parameters(self, render_plan):
        source = self._datasource(render_plan, HTTPMethod.GET)
        assert "await dio.get(" in source
        assert "ApiList.usersProfile," in source
        assert "queryParameters: requestData," in source
        assert "FormData" not in source
        assert "dart:convert" not in source

    @pytest.mark.parametrize("method", [HTTPMethod.POST, HTTPMethod.PUT])
    def test_post_put_use_form_data(self, render_plan, method):
        source = self._datasource(render_plan, method)
        assert "final formData = FormData.fromMap(requestData);" in source
        assert f"await dio.{method.value.lower()}(" in source
        assert "data: formData," in source

    def test_delete_uses_json_body(self, render_plan):
        source = self._datasource(render_plan, HTTPMethod.DELETE)
        assert source.startswith("import 'dart:convert';")
        assert "await dio.delete(" in source
        assert "data: json.encode(requestData)," in source

    def test_class_names(self, render_plan):
        source = self._datasource(render_plan, HTTPMethod.GET)
        assert "abstract class UsersRemoteDataSource {" in source
        assert "class UsersRemoteDataSourceImpl implements UsersRemoteDataSource {" in source
        assert "Future<UsersResponseModel> getUsers(GetUsersParams params)" in source
        assert "return UsersResponseModel.fromJson(response);" in source

    def test_list_root_rewrapped(self, render_plan):
        assert "'data': response" not in self._datasource(render_plan, HTTPMethod.GET)
        source = self._datasource(render_plan, HTTPMethod.GET, root_was_list=True)
        assert "UsersResponseModel.fromJson(<String, dynamic>{'data': response})" in source


# ---------------------------------------------------------------------------
# Domain and core files
# ---------------------------------------------------------------------------


class TestDomainAndCore:
    def test_repository_and_use_case(self, render_plan, users_payload, users_feature):
        rendered = render_plan(users_payload, users_feature)
        repository = _by_layer(rendered, Layer.DOMAIN_REPOSITORY_IFACE)
        use_case = _by_layer(rendered, Layer.DOMAIN_USECASE)
        impl = _by_layer(rendered, Layer.DATA_REPOSITORY_IMPL)

        assert "abstract class UsersRepository {" in repository
        assert "Future<Either<Failure, UsersResponseEntity>> getUsers(" in repository
        assert "class GetUsersUseCase {" in use_case
        assert "return await repository.getUsers(params);" in use_case
        assert "class UsersRepositoryImpl implements UsersRepository {" in impl
        assert "return Right(remoteData);" in impl

    def test_params(self, render_plan, users_payload, users_feature):
        params = _by_layer(render_plan(users_payload, users_feature), Layer.DOMAIN_PARAMS)
        assert "class GetUsersParams extends Equatable {" in params
        assert "Map<String, dynamic> toJson()" in params

    def test_endpoint_registry(self, render_plan, users_payload, users_feature):
        rendered = render_plan(users_payload, users_feature)
        registry = rendered["lib/core/network/api_constants.dart"].content
        assert "final class ApiList {" in registry
        assert 'static const apiBaseUrl = "https://api.example.com";' in registry
        assert "  // Generated endpoint\n" in registry
        assert 'static const usersProfile = "/api/users/profile";' in registry
        assert registry.index("usersProfile") < registry.index("// Add your endpoints here")

    def test_dio_client_timeout(self, render_plan, users_payload, users_feature):
        client = render_plan(users_payload, users_feature)["lib/core/network/dio_client.dart"]
        assert "connectTimeout = const Duration(seconds: 30)" in client.content
        for verb in ("get", "post", "put", "delete"):
            assert f"Future<dynamic> {verb}(" in client.content

    def test_core_support_files(self, render_plan, users_payload, users_feature):
        rendered = render_plan(users_payload, users_feature)
        assert "class NoInternetException" in rendered["lib/core/error/exceptions.dart"].content
        assert "class ServerFailure" in rendered["lib/core/error/failures.dart"].content
        assert "safeParse" in rendered["lib/core/utils/data_parser.dart"].content

    def test_rendering_is_deterministic(self, render_plan, nested_payload, users_feature):
        first = render_plan(nested_payload, users_feature)
        second = render_plan(nested_payload, users_feature)
        assert {p: a.content for p, a in first.items()} == {
            p: a.content for p, a in second.items()
        }
