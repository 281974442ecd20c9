"""
Authenticated request execution with node failover.

Each attempt resolves credentials, signs for the service the target host
expects, sends, and classifies the response. Only transport failures move
on to the next node; any received response ends the attempt.
"""

import json
import logging
from typing import Any, Dict, List, Optional

import httpx

from opensearch_navigator.auth.credentials import CredentialResolver
from opensearch_navigator.auth.service import classify_service
from opensearch_navigator.auth.signer import SigV4Signer
from opensearch_navigator.config import get_settings
from opensearch_navigator.core.errors import (
    AuthenticationFailed,
    NoNodesConfigured,
    TransportError,
    UpstreamError,
)
from opensearch_navigator.core.interfaces import ICredentialResolver, IRequestSigner
from opensearch_navigator.core.models import ConnectionProfile, GatewayResponse


logger = logging.getLogger(__name__)

JSON_CONTENT_TYPE = "application/json"


def normalize_nodes(nodes: List[str]) -> List[str]:
    """Drop blank entries and trailing slashes, keeping order."""
    return [node.strip().rstrip("/") for node in nodes if node and node.strip()]


def normalize_path(path: str) -> str:
    return path if path.startswith("/") else f"/{path}"


def parse_body(response: httpx.Response) -> Any:
    """Parse a JSON body, wrapping non-JSON text as {"raw": text}."""
    try:
        return response.json()
    except ValueError:
        return {"raw": response.text}


def classify_response(response: httpx.Response, node: str) -> GatewayResponse:
    """
    Turn a received response into a result or a typed error.
    
    Raises:
        AuthenticationFailed: On 401 or 403
        UpstreamError: On any other non-2xx status
    """
    status = response.status_code
    if status in (401, 403):
        raise AuthenticationFailed(status, response.text, node=node)
    if not 200 <= status < 300:
        raise UpstreamError(status, response.text, node=node)
    return GatewayResponse(status=status, data=parse_body(response), node=node)


class ExecutionGateway:
    """
    Executes requests against the configured nodes.
    
    Credentials are resolved per attempt and never cached. Nodes are tried
    strictly in order, one at a time.
    """
    
    def __init__(
        self,
        resolver: Optional[ICredentialResolver] = None,
        signer: Optional[IRequestSigner] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Initialize execution gateway.
        
        Args:
            resolver: Credential resolver (shared AWS files by default)
            signer: Request signer (SigV4 by default)
            client: HTTP client to reuse; a short-lived one is created per call otherwise
        """
        self.resolver = resolver or CredentialResolver()
        self.signer = signer or SigV4Signer()
        self.client = client
    
    async def execute(
        self,
        profile: ConnectionProfile,
        path: str,
        method: str = "GET",
        body: Any = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> GatewayResponse:
        """
        Execute a request with failover across the profile's nodes.
        
        Args:
            profile: Connection profile with nodes, region and auth
            path: Request path, optionally with a query string
            method: HTTP method
            body: dict/list (sent as JSON), str, bytes, or None
            headers: Extra request headers
            
        Returns:
            Parsed 2xx response and the node that served it
            
        Raises:
            NoNodesConfigured: If the profile has no nodes
            CredentialError: If credentials cannot be resolved (no failover)
            AuthenticationFailed: On 401/403 from a node (no failover)
            UpstreamError: On other non-2xx from a node (no failover)
            TransportError: If every node failed without responding
        """
        nodes = normalize_nodes(profile.nodes)
        if not nodes:
            raise NoNodesConfigured()
        
        if self.client is not None:
            return await self._execute_nodes(self.client, nodes, profile, path, method, body, headers)
        
        async with httpx.AsyncClient() as client:
            return await self._execute_nodes(client, nodes, profile, path, method, body, headers)
    
    async def _execute_nodes(
        self,
        client: httpx.AsyncClient,
        nodes: List[str],
        profile: ConnectionProfile,
        path: str,
        method: str,
        body: Any,
        headers: Optional[Dict[str, str]],
    ) -> GatewayResponse:
        path = normalize_path(path)
        last_error: Optional[TransportError] = None
        
        for position, node in enumerate(nodes, start=1):
            url = f"{node}{path}"
            
            # Credential errors are not node specific; let them abort the call
            credentials = self.resolver.resolve(profile)
            
            request = self.build_request(method, url, body, headers, profile.timeout)
            if credentials is not None:
                region = profile.region or credentials.region or get_settings().default_region
                request = self.signer.sign(request, credentials, region, classify_service(url))
            
            logger.debug("%s %s (node %d/%d)", method.upper(), url, position, len(nodes))
            try:
                response = await client.send(request)
            except httpx.TransportError as e:
                last_error = TransportError(node, e)
                if position < len(nodes):
                    logger.warning("Node %s unreachable (%s), trying next node", node, e)
                else:
                    logger.warning("Node %s unreachable (%s)", node, e)
                continue
            
            return classify_response(response, node)
        
        raise last_error or TransportError(nodes[-1])
    
    @staticmethod
    def build_request(
        method: str,
        url: str,
        body: Any = None,
        headers: Optional[Dict[str, str]] = None,
        timeout: Optional[float] = None,
    ) -> httpx.Request:
        """Build an unsigned request with its body serialized and timeout attached."""
        request_headers = dict(headers or {})
        content: Optional[bytes] = None
        
        if isinstance(body, (dict, list)):
            content = json.dumps(body).encode("utf-8")
            request_headers.setdefault("content-type", JSON_CONTENT_TYPE)
        elif isinstance(body, str):
            content = body.encode("utf-8")
            request_headers.setdefault("content-type", JSON_CONTENT_TYPE)
        elif isinstance(body, bytes):
            content = body
        
        attempt_timeout = timeout if timeout is not None else get_settings().request_timeout
        return httpx.Request(
            method.upper(),
            url,
            headers=request_headers,
            content=content,
            extensions={"timeout": httpx.Timeout(attempt_timeout).as_dict()},
        )
