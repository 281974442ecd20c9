"""Query execution, result formatting and search sequencing."""

from opensearch_navigator.execution.gateway import ExecutionGateway
from opensearch_navigator.execution.result_formatter import ResultFormatter
from opensearch_navigator.execution.session import SearchSession

__all__ = ["ExecutionGateway", "ResultFormatter", "SearchSession"]
