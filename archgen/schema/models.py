"""Pydantic v2 models for inferred payload schemas.

A sample JSON payload is described by a tree of ``SchemaNode`` values:
scalars, homogeneous lists and named records.  Records keep their fields
in the source object's key order; every generated layer reproduces that
order.
"""

from __future__ import annotations

from collections.abc import Iterator
from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

# Parsed JSON as produced by ``json.loads``.
JSONValue = Union[None, bool, int, float, str, list["JSONValue"], dict[str, "JSONValue"]]


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class ScalarKind(str, Enum):
    """Kind of a scalar leaf. ``DYNAMIC`` stands for "no type information"."""
    DYNAMIC = "dynamic"
    BOOL = "bool"
    INT = "int"
    FLOAT = "float"
    STRING = "string"


class LayerSuffix(str, Enum):
    """Tag distinguishing the domain and data renderings of one schema."""
    ENTITY = "Entity"
    MODEL = "Model"


# ---------------------------------------------------------------------------
# Type names
# ---------------------------------------------------------------------------

class TypeName(BaseModel):
    """Resolved class name of a record: ``<logical_name><layer_suffix>``."""

    model_config = ConfigDict(frozen=True)

    logical_name: str = Field(..., min_length=1, description="PascalCase name, e.g. 'Meta'")
    layer_suffix: LayerSuffix = Field(..., description="Entity or Model")

    @property
    def qualified(self) -> str:
        return f"{self.logical_name}{self.layer_suffix.value}"

    def for_layer(self, suffix: LayerSuffix) -> TypeName:
        """Return the same logical name with a different layer suffix."""
        return TypeName(logical_name=self.logical_name, layer_suffix=suffix)

    def __str__(self) -> str:
        return self.qualified


# ---------------------------------------------------------------------------
# Schema nodes
# ---------------------------------------------------------------------------

class ScalarNode(BaseModel):
    """A leaf value: null, bool, int, float or string."""

    model_config = ConfigDict(frozen=True)

    tag: Literal["scalar"] = "scalar"
    kind: ScalarKind

    def for_layer(self, suffix: LayerSuffix) -> ScalarNode:
        return self


class ListNode(BaseModel):
    """A list whose element schema was taken from its first element."""

    model_config = ConfigDict(frozen=True)

    tag: Literal["list"] = "list"
    element: SchemaNode

    def for_layer(self, suffix: LayerSuffix) -> ListNode:
        return ListNode(element=self.element.for_layer(suffix))


class RecordField(BaseModel):
    """One ``key -> schema`` pair of a record, in source order."""

    model_config = ConfigDict(frozen=True)

    key: str
    value: SchemaNode


class RecordNode(BaseModel):
    """A JSON object with a resolved type name."""

    model_config = ConfigDict(frozen=True)

    tag: Literal["record"] = "record"
    name: TypeName
    fields: list[RecordField] = Field(default_factory=list)

    @property
    def field_keys(self) -> list[str]:
        return [field.key for field in self.fields]

    def for_layer(self, suffix: LayerSuffix) -> RecordNode:
        """Rebuild this record tree with every type name moved to *suffix*."""
        return RecordNode(
            name=self.name.for_layer(suffix),
            fields=[
                RecordField(key=field.key, value=field.value.for_layer(suffix))
                for field in self.fields
            ],
        )


SchemaNode = Annotated[
    Union[ScalarNode, ListNode, RecordNode],
    Field(discriminator="tag"),
]

ListNode.model_rebuild()
RecordField.model_rebuild()
RecordNode.model_rebuild()


# ---------------------------------------------------------------------------
# Traversal
# ---------------------------------------------------------------------------

def iter_records(node: ScalarNode | ListNode | RecordNode) -> Iterator[RecordNode]:
    """Yield every record in the tree, innermost first.

    A record is yielded after all records reachable through its fields, so
    a definition never precedes the definitions it refers to.  Records that
    share a name are all yielded.
    """
    if isinstance(node, ListNode):
        yield from iter_records(node.element)
    elif isinstance(node, RecordNode):
        for field in node.fields:
            yield from iter_records(field.value)
        yield node
