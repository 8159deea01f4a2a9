"""Schema inference -- turns a sample JSON payload into a named type tree.

Quick usage::

    from archgen.schema import NameResolver, SchemaInferencer

    root = SchemaInferencer(NameResolver("users")).infer({"id": 1})
"""

from archgen.schema.inferencer import SchemaInferencer
from archgen.schema.models import (
    LayerSuffix,
    ListNode,
    RecordField,
    RecordNode,
    ScalarKind,
    ScalarNode,
    SchemaNode,
    TypeName,
    iter_records,
)
from archgen.schema.naming import NameResolver

__all__ = [
    "LayerSuffix",
    "ListNode",
    "NameResolver",
    "RecordField",
    "RecordNode",
    "ScalarKind",
    "ScalarNode",
    "SchemaInferencer",
    "SchemaNode",
    "TypeName",
    "iter_records",
]
