"""
Result formatting utilities.

Normalizes raw engine responses into the navigator's page and index models.
"""

from typing import Any, Dict, List, Optional

from opensearch_navigator.core.models import Hit, IndexInfo, SearchPage


class ResultFormatter:
    """Formats engine responses into navigator models."""
    
    RELATIONS = {"eq": "exact", "gte": "approximate"}
    
    @staticmethod
    def format_search(data: Any, offset: int = 0, size: int = 0) -> SearchPage:
        """
        Format a `_search` response as a page of hits.
        
        Args:
            data: Parsed search response; anything but an object yields an empty page
            offset: Requested offset, echoed back
            size: Requested page size, echoed back
            
        Returns:
            SearchPage with totals and hits
        """
        if not isinstance(data, dict):
            data = {}
        hits_block = data.get("hits")
        if not isinstance(hits_block, dict):
            hits_block = {}
        total = hits_block.get("total", 0)
        
        # Older engines report the total as a bare number
        if isinstance(total, dict):
            total_value = int(total.get("value", 0))
            relation = ResultFormatter.RELATIONS.get(total.get("relation", "eq"), "exact")
        else:
            total_value = int(total or 0)
            relation = "exact"
        
        hits = [
            Hit(
                id=str(hit.get("_id", "")),
                index=str(hit.get("_index", "")),
                score=hit.get("_score"),
                source=hit.get("_source") or {},
            )
            for hit in hits_block.get("hits") or []
            if isinstance(hit, dict)
        ]
        
        return SearchPage(
            total=total_value,
            total_relation=relation,
            took=data.get("took"),
            hits=hits,
            offset=offset,
            size=size,
        )
    
    @staticmethod
    def format_indices(rows: List[Dict[str, Any]], include_hidden: bool = False) -> List[IndexInfo]:
        """
        Format `_cat/indices?format=json` rows.
        
        Args:
            rows: Parsed cat response
            include_hidden: Keep dot-prefixed system indices
            
        Returns:
            Index records sorted by name
        """
        indices = []
        for row in rows or []:
            name = row.get("index")
            if not name or (name.startswith(".") and not include_hidden):
                continue
            indices.append(
                IndexInfo(
                    index=name,
                    health=row.get("health"),
                    status=row.get("status"),
                    docs_count=_to_int(row.get("docs.count")),
                    store_size=row.get("store.size"),
                )
            )
        return sorted(indices, key=lambda info: info.index)


def _to_int(value: Any) -> Optional[int]:
    try:
        return int(value)
    except (TypeError, ValueError):
        return None
