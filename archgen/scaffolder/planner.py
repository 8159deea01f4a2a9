"""Artifact planning.

Turns an inferred schema and a feature descriptor into the ordered list of
files one run produces.  Planning is pure: it decides paths, templates and
template context, and leaves rendering and writing to later passes.

Order of the plan:

1. network core (endpoint registry, HTTP client, auth interceptor,
   connectivity checks) and the core support files they import
2. domain entities, repository interface, use case, params
3. data model, remote datasource, repository implementation
"""

from __future__ import annotations

from typing import Any

from archgen.config import DEFAULT_BASE_URL
from archgen.scaffolder.models import Artifact, FeatureDescriptor, Layer
from archgen.scaffolder.records import build_records
from archgen.schema.models import LayerSuffix, ListNode, RecordNode, ScalarNode

LIB = "lib"

# (template, path under lib/, layer) for schema-independent files.
_CORE_ARTIFACTS: list[tuple[str, str, Layer]] = [
    ("core/network/api_constants.dart.j2", "core/network/api_constants.dart", Layer.NETWORK_CORE),
    ("core/network/dio_client.dart.j2", "core/network/dio_client.dart", Layer.NETWORK_CORE),
    (
        "core/network/interceptor/authorization_interceptor.dart.j2",
        "core/network/interceptor/authorization_interceptor.dart",
        Layer.NETWORK_CORE,
    ),
    ("core/network/network_info.dart.j2", "core/network/network_info.dart", Layer.NETWORK_CORE),
    ("core/network/network_service.dart.j2", "core/network/network_service.dart", Layer.NETWORK_CORE),
    ("core/error/exceptions.dart.j2", "core/error/exceptions.dart", Layer.CORE_SUPPORT),
    ("core/error/failures.dart.j2", "core/error/failures.dart", Layer.CORE_SUPPORT),
    ("core/utils/data_parser.dart.j2", "core/utils/data_parser.dart", Layer.CORE_SUPPORT),
]


class PlanningError(ValueError):
    """Raised when a schema cannot be planned (its root is not a record)."""


class ArtifactPlanner:
    """Plans the layered file set for one feature.

    Args:
        client_timeout: Connect/receive timeout, in seconds, baked into the
            generated HTTP client.
    """

    def __init__(self, client_timeout: int = 30) -> None:
        self.client_timeout = client_timeout

    def plan(
        self,
        root: ScalarNode | ListNode | RecordNode,
        feature: FeatureDescriptor,
        *,
        root_was_list: bool = False,
    ) -> list[Artifact]:
        """Return the ordered artifacts for *root* and *feature*.

        Args:
            root: Root schema; must be a record.
            feature: Feature the files are generated for.
            root_was_list: The sample was a top-level array wrapped under
                ``data``; the datasource then re-wraps list responses.

        Raises:
            PlanningError: If *root* is not a record.
        """
        if not isinstance(root, RecordNode):
            raise PlanningError(
                f"Cannot plan {feature.name}: the payload root must be a JSON object"
            )

        base = self._base_context(feature, root)
        artifacts = self._core_artifacts(feature, base)

        domain = f"{LIB}/feature/{feature.name}/domain"
        data = f"{LIB}/feature/{feature.name}/data"
        entities = build_records(root, LayerSuffix.ENTITY)
        models = build_records(root, LayerSuffix.MODEL, with_decoders=True)

        artifacts.extend([
            _artifact(
                f"{domain}/entities/{feature.name}_response_entity.dart",
                Layer.DOMAIN_ENTITY,
                "feature/domain/entity.dart.j2",
                {**base, "records": entities},
            ),
            _artifact(
                f"{domain}/repositories/{feature.name}_repository.dart",
                Layer.DOMAIN_REPOSITORY_IFACE,
                "feature/domain/repository.dart.j2",
                base,
            ),
            _artifact(
                f"{domain}/usecases/get_{feature.name}_use_case.dart",
                Layer.DOMAIN_USECASE,
                "feature/domain/use_case.dart.j2",
                base,
            ),
            _artifact(
                f"{domain}/usecases/get_{feature.name}_params.dart",
                Layer.DOMAIN_PARAMS,
                "feature/domain/params.dart.j2",
                base,
            ),
            _artifact(
                f"{data}/models/{feature.name}_response_model.dart",
                Layer.DATA_MODEL,
                "feature/data/model.dart.j2",
                {**base, "records": models},
            ),
            _artifact(
                f"{data}/datasources/{feature.name}_remote_data_source.dart",
                Layer.DATA_DATASOURCE,
                "feature/data/remote_data_source.dart.j2",
                {**base, "wrap_list": root_was_list},
            ),
            _artifact(
                f"{data}/repositories/{feature.name}_repository_impl.dart",
                Layer.DATA_REPOSITORY_IMPL,
                "feature/data/repository_impl.dart.j2",
                base,
            ),
        ])
        return artifacts

    # -- Helpers -------------------------------------------------------------

    def _core_artifacts(
        self, feature: FeatureDescriptor, base: dict[str, Any]
    ) -> list[Artifact]:
        context = {
            **base,
            "base_url": feature.base_url or DEFAULT_BASE_URL,
            "endpoint_path": feature.endpoint_path,
            "timeout": self.client_timeout,
        }
        return [
            _artifact(f"{LIB}/{path}", layer, template, context)
            for template, path, layer in _CORE_ARTIFACTS
        ]

    @staticmethod
    def _base_context(feature: FeatureDescriptor, root: RecordNode) -> dict[str, Any]:
        pascal = feature.pascal_name
        return {
            "feature": feature.model_dump(mode="json"),
            "endpoint_constant": feature.endpoint_constant,
            "names": {
                "entity": root.name.for_layer(LayerSuffix.ENTITY).qualified,
                "model": root.name.for_layer(LayerSuffix.MODEL).qualified,
                "repository": f"{pascal}Repository",
                "data_source": f"{pascal}RemoteDataSource",
                "use_case": f"Get{pascal}UseCase",
                "params": f"Get{pascal}Params",
                "method": f"get{pascal}",
            },
        }


def _artifact(path: str, layer: Layer, template: str, context: dict[str, Any]) -> Artifact:
    return Artifact(relative_path=path, layer=layer, template=template, context=context)
