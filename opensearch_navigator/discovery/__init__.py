"""Serverless collection discovery."""

from opensearch_navigator.discovery.client import DiscoveryClient, collection_endpoint

__all__ = ["DiscoveryClient", "collection_endpoint"]
