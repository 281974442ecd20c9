"""
OpenSearch mapping flattening.

Turns the nested `_mapping` response into addressable field paths.
"""

import logging
from typing import Any, Dict, List, Optional

from opensearch_navigator.core.models import FieldDefinition


logger = logging.getLogger(__name__)


def flatten_mapping(properties: Dict[str, Any], prefix: str = "") -> List[FieldDefinition]:
    """
    Flatten mapping properties into leaf field definitions.
    
    Container nodes (those with their own `properties`) are recursed into
    and never emitted. Output follows the source's key order.
    
    Args:
        properties: The `properties` block of a mapping
        prefix: Dotted path of the parent node
        
    Returns:
        Field definitions with full dotted paths
    """
    fields: List[FieldDefinition] = []
    
    for field_name, field_props in properties.items():
        full_path = f"{prefix}.{field_name}" if prefix else field_name
        field_props = field_props or {}
        
        if "properties" in field_props:
            fields.extend(flatten_mapping(field_props["properties"] or {}, full_path))
        else:
            fields.append(FieldDefinition(path=full_path, type=field_props.get("type")))
    
    return fields


def extract_properties(mapping_response: Dict[str, Any], index_name: Optional[str] = None) -> Dict[str, Any]:
    """
    Pick the properties block out of a `GET /{index}/_mapping` response.
    
    The response is keyed by concrete index name, which differs from the
    requested name for aliases and patterns, so the first entry is used
    when the requested name is absent.
    
    Args:
        mapping_response: Parsed `_mapping` response
        index_name: Index that was requested
        
    Returns:
        Properties dictionary (empty when the mapping has none)
    """
    if not isinstance(mapping_response, dict) or not mapping_response:
        return {}
    
    if index_name and index_name in mapping_response:
        index_mapping = mapping_response[index_name]
    else:
        index_mapping = next(iter(mapping_response.values()))
    
    if not isinstance(index_mapping, dict):
        return {}
    
    properties = index_mapping.get("mappings", {}).get("properties", {})
    logger.debug("Mapping for %s has %d top-level properties", index_name, len(properties))
    return properties
