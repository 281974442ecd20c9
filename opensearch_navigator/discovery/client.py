"""
OpenSearch Serverless collection discovery.

Calls the control-plane ListCollections operation for a region and maps
each summary to a collection endpoint.
"""

import json
import logging
import re
from typing import Any, Dict, List, Optional

import httpx

from opensearch_navigator.auth.service import SERVERLESS_SERVICE
from opensearch_navigator.auth.signer import SigV4Signer
from opensearch_navigator.config import get_settings
from opensearch_navigator.core.errors import DiscoveryError, InvalidRegion
from opensearch_navigator.core.interfaces import IRequestSigner
from opensearch_navigator.core.models import CollectionRecord, CredentialSet, DiscoveryResult


logger = logging.getLogger(__name__)

LIST_COLLECTIONS_TARGET = "OpenSearchServerless.ListCollections"
AMZ_JSON_CONTENT_TYPE = "application/x-amz-json-1.0"
MAX_PAGES = 50

REGION_PATTERN = re.compile(r"[a-z]{2}(-[a-z]+)+-\d+")


def control_plane_url(region: str) -> str:
    return f"https://{SERVERLESS_SERVICE}.{region}.amazonaws.com/"


def collection_endpoint(collection_id: str, region: str) -> str:
    """Data-plane endpoint for a serverless collection."""
    return f"https://{collection_id}.{region}.{SERVERLESS_SERVICE}.amazonaws.com"


class DiscoveryClient:
    """
    Lists serverless collections available to a credential set.
    
    Zero collections is a successful, empty result; any failure to ask is
    raised as DiscoveryError.
    """
    
    def __init__(
        self,
        signer: Optional[IRequestSigner] = None,
        client: Optional[httpx.AsyncClient] = None,
        timeout: Optional[float] = None,
    ):
        """
        Initialize discovery client.
        
        Args:
            signer: Request signer (SigV4 by default)
            client: HTTP client to reuse; a short-lived one is created otherwise
            timeout: Request timeout in seconds
        """
        self.signer = signer or SigV4Signer()
        self.client = client
        self.timeout = timeout
    
    async def discover(self, region: str, credentials: CredentialSet) -> DiscoveryResult:
        """
        List collections in a region.
        
        Args:
            region: AWS region to query
            credentials: Resolved credentials
            
        Returns:
            DiscoveryResult, possibly with no collections
            
        Raises:
            InvalidRegion: If the region is not a well-formed region name
            DiscoveryError: On transport failure or a non-2xx response
        """
        if not REGION_PATTERN.fullmatch(region or ""):
            raise InvalidRegion(region)
        
        if self.client is not None:
            collections = await self._list_all(self.client, region, credentials)
        else:
            async with httpx.AsyncClient() as client:
                collections = await self._list_all(client, region, credentials)
        
        logger.info("Discovered %d collection(s) in %s", len(collections), region)
        return DiscoveryResult(region=region, collections=collections)
    
    async def _list_all(
        self, client: httpx.AsyncClient, region: str, credentials: CredentialSet
    ) -> List[CollectionRecord]:
        collections: List[CollectionRecord] = []
        next_token: Optional[str] = None
        
        for _ in range(MAX_PAGES):
            data = await self._list_page(client, region, credentials, next_token)
            for summary in data.get("collectionSummaries") or []:
                collection_id = summary.get("id")
                if not collection_id:
                    continue
                collections.append(
                    CollectionRecord(
                        name=summary.get("name") or collection_id,
                        id=collection_id,
                        endpoint=collection_endpoint(collection_id, region),
                    )
                )
            next_token = data.get("nextToken")
            if not next_token:
                break
        
        return collections
    
    async def _list_page(
        self,
        client: httpx.AsyncClient,
        region: str,
        credentials: CredentialSet,
        next_token: Optional[str],
    ) -> Dict[str, Any]:
        body: Dict[str, Any] = {}
        if next_token:
            body["nextToken"] = next_token
        
        timeout = self.timeout if self.timeout is not None else get_settings().request_timeout
        request = httpx.Request(
            "POST",
            control_plane_url(region),
            headers={
                "content-type": AMZ_JSON_CONTENT_TYPE,
                "x-amz-target": LIST_COLLECTIONS_TARGET,
            },
            content=json.dumps(body).encode("utf-8"),
            extensions={"timeout": httpx.Timeout(timeout).as_dict()},
        )
        request = self.signer.sign(request, credentials, region, SERVERLESS_SERVICE)
        
        try:
            response = await client.send(request)
        except httpx.TransportError as e:
            raise DiscoveryError(f"Could not reach {request.url.host}: {e}") from e
        
        if not 200 <= response.status_code < 300:
            raise DiscoveryError(
                f"AWS API error ({response.status_code}): {response.text[:500]}",
                status=response.status_code,
                body=response.text,
            )
        
        try:
            return response.json()
        except ValueError as e:
            raise DiscoveryError(
                "ListCollections returned a non-JSON body", body=response.text
            ) from e
