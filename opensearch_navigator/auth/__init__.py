"""Credential resolution, request signing and service classification."""

from opensearch_navigator.auth.credentials import CredentialResolver, list_profiles
from opensearch_navigator.auth.service import (
    MANAGED_SERVICE,
    SERVERLESS_SERVICE,
    classify_service,
)
from opensearch_navigator.auth.signer import SigV4Signer

__all__ = [
    "CredentialResolver",
    "list_profiles",
    "MANAGED_SERVICE",
    "SERVERLESS_SERVICE",
    "classify_service",
    "SigV4Signer",
]
