"""
OpenSearch Navigator - filter compilation and signed execution for OpenSearch.

Main entry point for searching, listing fields and discovering collections.
"""

from opensearch_navigator.orchestrator import NavigatorOrchestrator

__all__ = ["NavigatorOrchestrator"]
