"""Shared structural walk for the entity and model record layers.

Both layers render the same record tree: the same classes in the same
innermost-first order, with the same field list and constructor parameters.
``build_records`` performs that walk once per layer; the only per-layer
differences are the name suffix and whether deserialization expressions
are attached to the fields.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from archgen.schema.models import (
    LayerSuffix,
    ListNode,
    RecordNode,
    ScalarKind,
    ScalarNode,
    iter_records,
)
from archgen.utils import to_camel, to_pascal

_DART_SCALARS: dict[ScalarKind, str] = {
    ScalarKind.DYNAMIC: "dynamic",
    ScalarKind.BOOL: "bool",
    ScalarKind.INT: "int",
    ScalarKind.FLOAT: "double",
    ScalarKind.STRING: "String",
}

# Dart keywords, members inherited from Object and Equatable, and the
# generated fromJson factory.
_RESERVED = frozenset({
    "abstract", "as", "assert", "async", "await", "base", "break", "case",
    "catch", "class", "const", "continue", "covariant", "default", "deferred",
    "do", "dynamic", "else", "enum", "export", "extends", "extension",
    "external", "factory", "false", "final", "finally", "for", "Function",
    "get", "hide", "if", "implements", "import", "in", "interface", "is",
    "late", "library", "mixin", "new", "null", "on", "operator", "part",
    "required", "rethrow", "return", "sealed", "set", "show", "static",
    "super", "switch", "sync", "this", "throw", "true", "try", "typedef",
    "var", "void", "when", "while", "with", "yield",
    "hashCode", "runtimeType", "toString", "noSuchMethod", "props", "stringify",
    "fromJson",
})

JSON_MAP = "Map<String, dynamic>"


@dataclass
class FieldSpec:
    """One field of a rendered record class."""

    key: str
    identifier: str
    dart_type: str
    decode: str | None = None


@dataclass
class RecordSpec:
    """One rendered record class.

    ``base_name`` is the entity class a model extends; ``None`` for entities.
    """

    name: str
    base_name: str | None = None
    fields: list[FieldSpec] = field(default_factory=list)

    @property
    def identifiers(self) -> list[str]:
        return [f.identifier for f in self.fields]


def build_records(
    root: RecordNode,
    layer_suffix: LayerSuffix,
    *,
    with_decoders: bool = False,
) -> list[RecordSpec]:
    """Walk *root* and describe every record class of one layer.

    Args:
        root: Root record of the inferred schema (any suffix).
        layer_suffix: Layer to render; record names are moved to it.
        with_decoders: Attach ``fromJson`` expressions to each field.

    Returns:
        Record specs ordered innermost-first, root last.
    """
    tree = root.for_layer(layer_suffix)
    specs: list[RecordSpec] = []
    for record in iter_records(tree):
        base_name = None
        if layer_suffix is not LayerSuffix.ENTITY:
            base_name = record.name.for_layer(LayerSuffix.ENTITY).qualified
        spec = RecordSpec(name=record.name.qualified, base_name=base_name)
        identifiers = field_identifiers(record.field_keys)
        for record_field, identifier in zip(record.fields, identifiers):
            node = record_field.value
            spec.fields.append(
                FieldSpec(
                    key=record_field.key,
                    identifier=identifier,
                    dart_type=field_type(node),
                    decode=decode_expression(node, record_field.key) if with_decoders else None,
                )
            )
        specs.append(spec)
    return specs


# ---------------------------------------------------------------------------
# Types
# ---------------------------------------------------------------------------

def dart_type(node: ScalarNode | ListNode | RecordNode) -> str:
    """Dart type of a value with schema *node*."""
    if isinstance(node, ScalarNode):
        return _DART_SCALARS[node.kind]
    if isinstance(node, ListNode):
        return f"List<{dart_type(node.element)}>"
    return node.name.qualified


def field_type(node: ScalarNode | ListNode | RecordNode) -> str:
    """Dart type of a record field; nested records are nullable."""
    if isinstance(node, RecordNode):
        return f"{node.name.qualified}?"
    return dart_type(node)


# ---------------------------------------------------------------------------
# Identifiers
# ---------------------------------------------------------------------------

def field_identifiers(keys: list[str]) -> list[str]:
    """Map JSON keys to unique camelCase Dart identifiers, preserving order."""
    seen: set[str] = set()
    result: list[str] = []
    for index, key in enumerate(keys):
        identifier = to_camel(key)
        if not identifier:
            identifier = f"field{index}"
        elif identifier[0].isdigit():
            identifier = f"field{to_pascal(key)}"
        if identifier in _RESERVED:
            identifier = f"{identifier}_"
        candidate, counter = identifier, 2
        while candidate in seen:
            candidate = f"{identifier}{counter}"
            counter += 1
        seen.add(candidate)
        result.append(candidate)
    return result


def dart_string(value: str) -> str:
    """Escape *value* for a quoted Dart string literal."""
    return re.sub(r"""([\\'"$])""", r"\\\1", value)


# ---------------------------------------------------------------------------
# Deserialization
# ---------------------------------------------------------------------------

def decode_expression(node: ScalarNode | ListNode | RecordNode, key: str) -> str:
    """Dart expression reading field *key* out of ``json``.

    Scalars and lists of scalars go through ``safeParse``; a nested record
    calls its model's ``fromJson``; any other list maps the element decoder
    over its items.
    """
    label = dart_string(key)
    accessor = f"json['{label}']"
    if isinstance(node, RecordNode):
        return (
            f"{accessor} != null ? {node.name.qualified}.fromJson("
            f"{accessor} as {JSON_MAP}) : null"
        )
    if isinstance(node, ListNode) and not isinstance(node.element, ScalarNode):
        return f"{accessor} != null ? {_list_expression(node, accessor, 0, label)} : []"
    return f"safeParse<{dart_type(node)}>({accessor}, '{label}')"


def _list_expression(node: ListNode, var: str, depth: int, label: str) -> str:
    item = f"e{depth}"
    inner = _element_expression(node.element, item, depth + 1, label)
    return f"({var} as List).map(({item}) => {inner}).toList()"


def _element_expression(
    node: ScalarNode | ListNode | RecordNode, var: str, depth: int, label: str
) -> str:
    if isinstance(node, RecordNode):
        return f"{node.name.qualified}.fromJson({var} as {JSON_MAP})"
    if isinstance(node, ListNode) and not isinstance(node.element, ScalarNode):
        return _list_expression(node, var, depth, label)
    return f"safeParse<{dart_type(node)}>({var}, '{label}')"
