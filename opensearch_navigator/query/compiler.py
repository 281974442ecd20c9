"""
OpenSearch query compiler.

Converts the UI filter model into an OpenSearch query DSL document.
"""

import math
import re
from typing import Any, Dict, List, Union

from opensearch_navigator.core.models import (
    ConnectionProfile,
    FieldFilter,
    FilterOperator,
    FilterState,
    GeoFilter,
)


_NUMBER_PATTERN = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?$")

RANGE_OPERATORS = {
    FilterOperator.GT,
    FilterOperator.GTE,
    FilterOperator.LT,
    FilterOperator.LTE,
}

# Score first, then index order so ties do not reorder across pages
TIEBREAK_FIELD = "_doc"


def coerce_value(value: str) -> Union[str, int, float]:
    """
    Convert a filter value to a number when the whole string is one.
    
    Partially numeric strings such as "12abc" stay strings, as do
    non-finite spellings like "nan" or "inf".
    
    Args:
        value: Raw textual value from the filter model
        
    Returns:
        int, float, or the original string
    """
    text = value.strip()
    if not text or not _NUMBER_PATTERN.match(text):
        return value
    
    if "." not in text and "e" not in text.lower():
        return int(text)
    
    number = float(text)
    if not math.isfinite(number):
        return value
    return number


def format_distance(radius: float, unit: str) -> str:
    """Render a geo distance as '{radius}{unit}', dropping a trailing '.0'."""
    if float(radius).is_integer():
        return f"{int(radius)}{unit}"
    return f"{radius}{unit}"


class QueryCompiler:
    """
    Compiles filter state into OpenSearch DSL.
    
    Pure: no I/O, and the same inputs always yield an equal document.
    """
    
    def compile(self, filters: FilterState, profile: ConnectionProfile) -> Dict[str, Any]:
        """
        Build the query document for one page of results.
        
        Args:
            filters: Text query, geo filter, field filters and paging
            profile: Connection profile supplying field defaults
            
        Returns:
            OpenSearch search body with from/size, bool query and sort
        """
        must: List[Dict[str, Any]] = []
        filter_clauses: List[Dict[str, Any]] = []
        must_not: List[Dict[str, Any]] = []
        
        # Text query; an empty bool.must would match nothing useful
        if filters.query.strip():
            must.append(
                {
                    "multi_match": {
                        "query": filters.query,
                        "fields": list(profile.text_fields),
                    }
                }
            )
        else:
            must.append({"match_all": {}})
        
        if filters.geo.enabled:
            filter_clauses.append(self._geo_clause(filters.geo, profile))
        
        for field_filter in filters.field_filters:
            self._add_field_filter(field_filter, must, filter_clauses, must_not)
        
        return {
            "from": filters.offset,
            "size": filters.size,
            "query": {
                "bool": {
                    "must": must,
                    "filter": filter_clauses,
                    "must_not": must_not,
                }
            },
            "sort": [
                {"_score": {"order": "desc"}},
                {TIEBREAK_FIELD: {"order": "asc"}},
            ],
        }
    
    def _geo_clause(self, geo: GeoFilter, profile: ConnectionProfile) -> Dict[str, Any]:
        """Radius clause; the unit is passed through verbatim."""
        geo_field = geo.geo_field or profile.geo_field or "location"
        return {
            "geo_distance": {
                "distance": format_distance(geo.radius, geo.unit.value),
                geo_field: {"lat": geo.latitude, "lon": geo.longitude},
            }
        }
    
    def _add_field_filter(
        self,
        field_filter: FieldFilter,
        must: List[Dict[str, Any]],
        filter_clauses: List[Dict[str, Any]],
        must_not: List[Dict[str, Any]],
    ) -> None:
        """Dispatch one field filter into its clause bucket."""
        field = field_filter.field
        operator = field_filter.operator
        value = coerce_value(field_filter.value)
        
        # match_phrase behaves the same on analyzed text and exact-value
        # fields; a term clause on text silently matches nothing.
        if operator == FilterOperator.EQ:
            must.append({"match_phrase": {field: value}})
        elif operator == FilterOperator.NEQ:
            must_not.append({"match_phrase": {field: value}})
        elif operator == FilterOperator.CONTAINS:
            must.append(
                {
                    "wildcard": {
                        field: {
                            "value": f"*{field_filter.value}*",
                            "case_insensitive": True,
                        }
                    }
                }
            )
        elif operator in RANGE_OPERATORS:
            filter_clauses.append({"range": {field: {operator.value: value}}})
        elif operator == FilterOperator.EXISTS:
            filter_clauses.append({"exists": {"field": field}})
