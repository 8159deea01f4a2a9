"""Type name resolution for inferred records.

The root record of a payload is named after the feature
(``users`` -> ``UsersResponseEntity``); every nested record is named after
the last key of its field path (``meta`` -> ``MetaEntity``).  Names are
not checked for uniqueness across paths: two records reached through the
same leaf key at different depths get the same name, and both definitions
are emitted.
"""

from __future__ import annotations

from collections.abc import Sequence

from archgen.schema.models import LayerSuffix, TypeName
from archgen.utils import to_pascal

ROOT_SUFFIX = "Response"
FALLBACK_NAME = "Item"


class NameResolver:
    """Assigns deterministic type names to record nodes.

    Attributes:
        feature_name: Feature the payload belongs to; only used for the root.
    """

    def __init__(self, feature_name: str) -> None:
        self.feature_name = feature_name

    def resolve(self, field_path: Sequence[str], layer_suffix: LayerSuffix) -> TypeName:
        """Return the ``TypeName`` for the record found at *field_path*.

        Args:
            field_path: Keys leading from the payload root to the record.
                An empty path denotes the root itself.
            layer_suffix: ``Entity`` or ``Model``.
        """
        if not field_path:
            logical = f"{_identifier(self.feature_name)}{ROOT_SUFFIX}"
        else:
            logical = _identifier(field_path[-1])
        return TypeName(logical_name=logical, layer_suffix=layer_suffix)


def _identifier(segment: str) -> str:
    """PascalCase *segment* into something usable as a class name."""
    pascal = to_pascal(segment)
    if not pascal:
        return FALLBACK_NAME
    if pascal[0].isdigit():
        return f"{FALLBACK_NAME}{pascal}"
    return pascal
