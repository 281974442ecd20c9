"""
Navigator orchestrator - main entry point.

Coordinates query compilation, authenticated execution, mapping retrieval
and collection discovery behind one interface.
"""

import logging
from typing import Any, Dict, List, Optional
from urllib.parse import urlsplit

import httpx

from opensearch_navigator import demo
from opensearch_navigator.auth.credentials import CredentialResolver
from opensearch_navigator.core.errors import CredentialError
from opensearch_navigator.core.interfaces import ICredentialResolver
from opensearch_navigator.core.models import (
    AuthMode,
    ConnectionProfile,
    DiscoveryResult,
    FieldDefinition,
    FilterState,
    GatewayResponse,
    IndexInfo,
    SearchPage,
)
from opensearch_navigator.config import get_settings
from opensearch_navigator.discovery.client import DiscoveryClient
from opensearch_navigator.execution.gateway import ExecutionGateway
from opensearch_navigator.execution.result_formatter import ResultFormatter
from opensearch_navigator.execution.session import SearchSession
from opensearch_navigator.query.compiler import QueryCompiler
from opensearch_navigator.schema.mapping import extract_properties, flatten_mapping


logger = logging.getLogger(__name__)


class NavigatorOrchestrator:
    """
    Main orchestrator for exploring an OpenSearch index.
    
    Search, mapping and discovery are independent operations and share no
    mutable state, so they may run concurrently.
    """
    
    def __init__(
        self,
        gateway: Optional[ExecutionGateway] = None,
        compiler: Optional[QueryCompiler] = None,
        resolver: Optional[ICredentialResolver] = None,
        discovery: Optional[DiscoveryClient] = None,
    ):
        """
        Initialize orchestrator with its components.
        
        Args:
            gateway: Execution gateway for data-plane requests
            compiler: Query compiler
            resolver: Credential resolver shared by gateway and discovery
            discovery: Control-plane discovery client
        """
        self.resolver = resolver or CredentialResolver()
        self.gateway = gateway or ExecutionGateway(resolver=self.resolver)
        self.compiler = compiler or QueryCompiler()
        self.discovery = discovery or DiscoveryClient()
    
    @classmethod
    def from_http_client(
        cls,
        client: httpx.AsyncClient,
        resolver: Optional[ICredentialResolver] = None,
    ) -> "NavigatorOrchestrator":
        """
        Create an orchestrator whose components share one HTTP client.
        
        Args:
            client: HTTP client used for every outbound request
            resolver: Credential resolver
            
        Returns:
            Configured NavigatorOrchestrator
        """
        resolver = resolver or CredentialResolver()
        return cls(
            gateway=ExecutionGateway(resolver=resolver, client=client),
            resolver=resolver,
            discovery=DiscoveryClient(client=client),
        )
    
    def compile(self, filters: FilterState, profile: ConnectionProfile) -> Dict[str, Any]:
        """Compile filter state into the engine's query document."""
        return self.compiler.compile(filters, profile)
    
    async def search(self, profile: ConnectionProfile, filters: FilterState) -> SearchPage:
        """
        Compile and run a search for one page.
        
        Args:
            profile: Connection profile
            filters: Filter state
            
        Returns:
            Page of hits with totals and pagination echo
        """
        if profile.demo_mode:
            data = demo.generate_mock_response(filters.offset, filters.size, filters.query)
            return ResultFormatter.format_search(data, filters.offset, filters.size)
        
        body = self.compile(filters, profile)
        response = await self.gateway.execute(
            profile, f"/{profile.index}/_search", method="POST", body=body
        )
        return ResultFormatter.format_search(response.data, filters.offset, filters.size)
    
    async def get_mapping(self, profile: ConnectionProfile) -> List[FieldDefinition]:
        """
        Fetch the index mapping and flatten it into leaf fields.
        
        Args:
            profile: Connection profile naming the index
            
        Returns:
            Field definitions in mapping order
        """
        if profile.demo_mode:
            return flatten_mapping(extract_properties(demo.MOCK_MAPPING))
        
        response = await self.gateway.execute(profile, f"/{profile.index}/_mapping")
        return flatten_mapping(extract_properties(response.data, profile.index))
    
    async def list_indices(self, profile: ConnectionProfile) -> List[IndexInfo]:
        """List user-visible indices on the cluster or collection."""
        if profile.demo_mode:
            return ResultFormatter.format_indices(demo.MOCK_INDICES)
        
        response = await self.gateway.execute(profile, "/_cat/indices?format=json")
        rows = response.data if isinstance(response.data, list) else []
        return ResultFormatter.format_indices(rows)
    
    async def discover(
        self,
        region: Optional[str] = None,
        auth_mode: AuthMode = AuthMode.PROFILE,
        profile_name: Optional[str] = None,
        access_key: Optional[str] = None,
        secret_key: Optional[str] = None,
        session_token: Optional[str] = None,
    ) -> DiscoveryResult:
        """
        List serverless collections for a region and credential source.
        
        Raises:
            CredentialError: If no credentials can be resolved
            DiscoveryError: If the control plane could not be asked
        """
        region = region or get_settings().default_region
        credentials = self.resolver.resolve_credentials(
            mode=auth_mode,
            profile_name=profile_name,
            access_key=access_key,
            secret_key=secret_key,
            session_token=session_token,
            region=region,
        )
        if credentials is None:
            raise CredentialError("No credentials provided; discovery requires a profile or static keys.")
        return await self.discovery.discover(region, credentials)
    
    def list_profiles(self) -> List[str]:
        """Names of locally configured AWS profiles."""
        return self.resolver.list_profiles()
    
    async def proxy(
        self,
        url: str,
        method: str = "GET",
        body: Any = None,
        region: Optional[str] = None,
        auth_mode: AuthMode = AuthMode.PROFILE,
        profile_name: Optional[str] = None,
        access_key: Optional[str] = None,
        secret_key: Optional[str] = None,
        session_token: Optional[str] = None,
    ) -> GatewayResponse:
        """
        Send a raw request to an absolute URL through the signing gateway.
        
        The URL's origin becomes the single node; path and query are kept.
        """
        parts = urlsplit(url)
        if not parts.scheme or not parts.netloc:
            raise ValueError(f"Proxy URL must be absolute: {url!r}")
        
        path = parts.path or "/"
        if parts.query:
            path = f"{path}?{parts.query}"
        
        profile = ConnectionProfile(
            nodes=[f"{parts.scheme}://{parts.netloc}"],
            region=region or get_settings().default_region,
            auth_mode=auth_mode,
            profile_name=profile_name,
            access_key=access_key,
            secret_key=secret_key,
            session_token=session_token,
        )
        return await self.gateway.execute(profile, path, method=method, body=body)
    
    def create_session(
        self, profile: ConnectionProfile, debounce_seconds: Optional[float] = None
    ) -> SearchSession:
        """Create a sequenced search session bound to a profile."""
        return SearchSession(self, profile, debounce_seconds=debounce_seconds)
