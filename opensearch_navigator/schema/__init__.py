"""Mapping flattening and field type utilities."""

from opensearch_navigator.schema.mapping import extract_properties, flatten_mapping
from opensearch_navigator.schema.type_mappings import TypeMapper

__all__ = ["extract_properties", "flatten_mapping", "TypeMapper"]
