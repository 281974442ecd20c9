"""Query compilation components."""

from opensearch_navigator.query.compiler import QueryCompiler, coerce_value

__all__ = ["QueryCompiler", "coerce_value"]
