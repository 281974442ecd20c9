"""
Type mapping utilities for OpenSearch field types.
"""

from typing import Dict, List

from opensearch_navigator.core.models import FilterOperator


class TypeMapper:
    """Maps OpenSearch field types to normalized kinds and usable operators."""
    
    OPENSEARCH_TYPE_MAP = {
        "text": "string",
        "match_only_text": "string",
        "keyword": "string",
        "constant_keyword": "string",
        "wildcard": "string",
        "integer": "number",
        "long": "number",
        "short": "number",
        "byte": "number",
        "double": "number",
        "float": "number",
        "half_float": "number",
        "scaled_float": "number",
        "unsigned_long": "number",
        "boolean": "boolean",
        "date": "date",
        "date_nanos": "date",
        "ip": "string",
        "geo_point": "geo",
        "geo_shape": "geo",
        "object": "object",
        "nested": "array",
    }
    
    OPERATORS_BY_KIND: Dict[str, List[FilterOperator]] = {
        "string": [
            FilterOperator.EQ,
            FilterOperator.NEQ,
            FilterOperator.CONTAINS,
            FilterOperator.EXISTS,
        ],
        "number": [
            FilterOperator.EQ,
            FilterOperator.NEQ,
            FilterOperator.GT,
            FilterOperator.GTE,
            FilterOperator.LT,
            FilterOperator.LTE,
            FilterOperator.EXISTS,
        ],
        "date": [
            FilterOperator.EQ,
            FilterOperator.NEQ,
            FilterOperator.GT,
            FilterOperator.GTE,
            FilterOperator.LT,
            FilterOperator.LTE,
            FilterOperator.EXISTS,
        ],
        "boolean": [FilterOperator.EQ, FilterOperator.NEQ, FilterOperator.EXISTS],
        "geo": [FilterOperator.EXISTS],
    }
    
    @classmethod
    def normalize_type(cls, field_type: str) -> str:
        """
        Normalize an OpenSearch type to a common kind.
        
        Args:
            field_type: Declared mapping type (e.g. "keyword", "long")
            
        Returns:
            One of string, number, boolean, date, geo, object, array, unknown
        """
        if not field_type:
            return "unknown"
        return cls.OPENSEARCH_TYPE_MAP.get(field_type.lower(), "unknown")
    
    @classmethod
    def operators_for(cls, field_type: str) -> List[str]:
        """Filter operators that make sense for a declared field type."""
        kind = cls.normalize_type(field_type)
        operators = cls.OPERATORS_BY_KIND.get(kind, list(FilterOperator))
        return [operator.value for operator in operators]
