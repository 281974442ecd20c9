"""Core interfaces, models and errors for the navigator."""

from opensearch_navigator.core.interfaces import (
    ICredentialResolver,
    IRequestSigner,
)
from opensearch_navigator.core.models import (
    AuthMode,
    CollectionRecord,
    ConnectionProfile,
    CredentialSet,
    DiscoveryResult,
    FieldDefinition,
    FieldFilter,
    FilterOperator,
    FilterState,
    GatewayResponse,
    GeoFilter,
    Hit,
    IndexInfo,
    SearchPage,
)
from opensearch_navigator.core.errors import (
    AuthenticationFailed,
    CredentialError,
    DiscoveryError,
    InvalidRegion,
    NavigatorError,
    NoNodesConfigured,
    TransportError,
    UpstreamError,
)

__all__ = [
    "ICredentialResolver",
    "IRequestSigner",
    "AuthMode",
    "CollectionRecord",
    "ConnectionProfile",
    "CredentialSet",
    "DiscoveryResult",
    "FieldDefinition",
    "FieldFilter",
    "FilterOperator",
    "FilterState",
    "GatewayResponse",
    "GeoFilter",
    "Hit",
    "IndexInfo",
    "SearchPage",
    "AuthenticationFailed",
    "CredentialError",
    "DiscoveryError",
    "InvalidRegion",
    "NavigatorError",
    "NoNodesConfigured",
    "TransportError",
    "UpstreamError",
]
