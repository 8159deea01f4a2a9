"""Schema inference from a single example payload.

Only one sample is ever consulted.  Lists take the schema of their first
element; heterogeneous lists are not reconciled, and an empty list has a
``dynamic`` element type since there is nothing to refine it from.
"""

from __future__ import annotations

from collections.abc import Sequence

from archgen.schema.models import (
    JSONValue,
    LayerSuffix,
    ListNode,
    RecordField,
    RecordNode,
    ScalarKind,
    ScalarNode,
)
from archgen.schema.naming import NameResolver


class SchemaInferencer:
    """Turns a parsed JSON value into a ``SchemaNode`` tree."""

    def __init__(self, resolver: NameResolver) -> None:
        self.resolver = resolver

    def infer(
        self,
        value: JSONValue,
        field_path: Sequence[str] = (),
        layer_suffix: LayerSuffix = LayerSuffix.ENTITY,
    ) -> ScalarNode | ListNode | RecordNode:
        """Infer the schema of *value*.

        Args:
            value: Parsed JSON (``None``, ``bool``, ``int``, ``float``,
                ``str``, ``list`` or ``dict``).
            field_path: Keys leading from the payload root to *value*.
            layer_suffix: Suffix used for every record name in the tree.

        Raises:
            TypeError: If *value* is not a JSON value.
        """
        path = tuple(field_path)

        if value is None:
            return ScalarNode(kind=ScalarKind.DYNAMIC)
        # bool must be checked before int: it is an int subclass.
        if isinstance(value, bool):
            return ScalarNode(kind=ScalarKind.BOOL)
        if isinstance(value, int):
            return ScalarNode(kind=ScalarKind.INT)
        if isinstance(value, float):
            return ScalarNode(kind=ScalarKind.FLOAT)
        if isinstance(value, str):
            return ScalarNode(kind=ScalarKind.STRING)
        if isinstance(value, list):
            if not value:
                return ListNode(element=ScalarNode(kind=ScalarKind.DYNAMIC))
            return ListNode(element=self.infer(value[0], path, layer_suffix))
        if isinstance(value, dict):
            name = self.resolver.resolve(path, layer_suffix)
            fields = [
                RecordField(key=key, value=self.infer(item, path + (key,), layer_suffix))
                for key, item in value.items()
            ]
            return RecordNode(name=name, fields=fields)

        raise TypeError(f"Not a JSON value: {type(value).__name__}")
