"""
Abstract interfaces for the execution pipeline.

These protocols define the seams between credential resolution, request
signing and execution so each stage can be replaced or faked in isolation.
"""

from typing import List, Optional, Protocol

import httpx

from opensearch_navigator.core.models import AuthMode, ConnectionProfile, CredentialSet


class ICredentialResolver(Protocol):
    """
    Turn a connection profile into credentials.
    
    Implementations resolve fresh on every call; nothing is cached.
    """
    
    def resolve(self, profile: ConnectionProfile) -> Optional[CredentialSet]:
        """
        Resolve credentials for the profile's auth mode.
        
        Args:
            profile: Connection profile selecting the auth mode
            
        Returns:
            Credential set, or None for anonymous access
            
        Raises:
            CredentialError: If the selected source cannot produce credentials
        """
        ...
    
    def resolve_credentials(
        self,
        mode: AuthMode,
        profile_name: Optional[str] = None,
        access_key: Optional[str] = None,
        secret_key: Optional[str] = None,
        session_token: Optional[str] = None,
        region: Optional[str] = None,
    ) -> Optional[CredentialSet]:
        """Resolve from an explicit mode and its profile name or static keys."""
        ...
    
    def list_profiles(self) -> List[str]:
        """Names of the profiles in the backing store; empty when it is absent."""
        ...


class IRequestSigner(Protocol):
    """Authenticate an unsigned HTTP request."""
    
    def sign(
        self,
        request: httpx.Request,
        credentials: CredentialSet,
        region: str,
        service: str,
    ) -> httpx.Request:
        """
        Return a signed copy of the request.
        
        Args:
            request: Unsigned request with its final URL and body
            credentials: Resolved credentials
            region: Signing region
            service: Signing service name
            
        Returns:
            New request carrying the authentication headers
        """
        ...
