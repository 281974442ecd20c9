"""
Demo-mode data.

Lets the navigator be explored without a cluster: a fixed mapping and
synthetic search pages shaped like real engine responses.
"""

import random
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional


DEMO_INDEX = "demo-index"
DEMO_TOTAL = 1250

MOCK_MAPPING: Dict[str, Any] = {
    DEMO_INDEX: {
        "mappings": {
            "properties": {
                "id": {"type": "keyword"},
                "name": {"type": "text"},
                "description": {"type": "text"},
                "status": {"type": "keyword"},
                "timestamp": {"type": "date"},
                "location": {"type": "geo_point"},
                "metadata": {
                    "properties": {
                        "host": {"type": "keyword"},
                        "latency_ms": {"type": "integer"},
                        "tags": {"type": "keyword"},
                    }
                },
            }
        }
    }
}

MOCK_INDICES: List[Dict[str, Any]] = [
    {
        "index": DEMO_INDEX,
        "health": "green",
        "status": "open",
        "docs.count": str(DEMO_TOTAL),
        "store.size": "1.2mb",
    }
]


def generate_mock_response(
    offset: int, size: int, query: str = "", seed: Optional[int] = None
) -> Dict[str, Any]:
    """
    Build a synthetic `_search` response for one page.
    
    Args:
        offset: First hit number
        size: Number of hits
        query: Free-text query, echoed into descriptions
        seed: Random seed for reproducible pages
        
    Returns:
        Response dictionary in the engine's `_search` shape
    """
    rng = random.Random(seed)
    now = datetime.now(timezone.utc).isoformat()
    hits = []
    
    for position in range(max(0, min(size, DEMO_TOTAL - offset))):
        doc_number = offset + position
        if query:
            description = f'Result matching "{query}" - simulated log entry'
        else:
            description = f"System heartbeat log entry #{doc_number}"
        
        hits.append(
            {
                "_index": DEMO_INDEX,
                "_id": f"doc-{doc_number}",
                "_score": 1.0,
                "_source": {
                    "id": f"usr_{doc_number}",
                    "name": f"Service Log #{doc_number}",
                    "description": description,
                    "location": {
                        "lat": round(34.05 + (rng.random() - 0.5), 4),
                        "lon": round(-118.25 + (rng.random() - 0.5), 4),
                    },
                    "status": "ERROR" if rng.random() > 0.8 else "SUCCESS",
                    "timestamp": now,
                    "metadata": {
                        "host": f"ip-10-0-1-{rng.randrange(255)}",
                        "latency_ms": rng.randrange(500),
                        "tags": ["production", "aws", "serverless"],
                    },
                },
            }
        )
    
    return {
        "took": 12,
        "timed_out": False,
        "hits": {
            "total": {"value": DEMO_TOTAL, "relation": "eq"},
            "max_score": 1.0,
            "hits": hits,
        },
    }
