"""
Credential resolution from static keys or the shared AWS profile files.

Profiles are loaded through botocore, so keys, session tokens, assumed
roles (role_arn/source_profile), SSO and credential_process profiles all
resolve the way the AWS CLI resolves them. Nothing is cached: each call
builds a fresh session so refreshed temporary credentials are picked up.
"""

import logging
from pathlib import Path
from typing import List, Optional

import botocore.session
from botocore.exceptions import BotoCoreError

from opensearch_navigator.config import get_settings
from opensearch_navigator.core.errors import CredentialError
from opensearch_navigator.core.models import AuthMode, ConnectionProfile, CredentialSet


logger = logging.getLogger(__name__)

DEFAULT_PROFILE = "default"

# Only the shared files are consulted, never the process environment or
# instance metadata.
EXCLUDED_PROVIDERS = ("env", "container-role", "iam-role", "boto-config")


def _store_paths(credentials_file: Optional[str], config_file: Optional[str]):
    settings = get_settings()
    return (
        Path(credentials_file or settings.shared_credentials_file).expanduser(),
        Path(config_file or settings.config_file).expanduser(),
    )


def _session(
    credentials_path: Path, config_path: Path, profile_name: Optional[str] = None
) -> botocore.session.Session:
    session = botocore.session.Session()
    session.set_config_variable("credentials_file", str(credentials_path))
    session.set_config_variable("config_file", str(config_path))
    if profile_name is not None:
        session.set_config_variable("profile", profile_name)
    return session


def list_profiles(
    credentials_file: Optional[str] = None,
    config_file: Optional[str] = None,
) -> List[str]:
    """
    List profile names found in the shared credentials and config files.
    
    A missing or unreadable store is not an error; it yields no profiles.
    
    Args:
        credentials_file: Path to the shared credentials file
        config_file: Path to the shared config file
        
    Returns:
        Sorted, de-duplicated profile names
    """
    credentials_path, config_path = _store_paths(credentials_file, config_file)
    try:
        profiles = _session(credentials_path, config_path).available_profiles
    except BotoCoreError as e:
        logger.warning("Could not read AWS profiles: %s", e)
        return []
    return sorted(set(profiles))


class CredentialResolver:
    """
    Resolves credentials for a connection profile.
    
    Implements the ICredentialResolver interface.
    """
    
    def __init__(
        self,
        credentials_file: Optional[str] = None,
        config_file: Optional[str] = None,
    ):
        """
        Initialize credential resolver.
        
        Args:
            credentials_file: Shared credentials file (default from settings)
            config_file: Shared config file (default from settings)
        """
        self.credentials_file = credentials_file
        self.config_file = config_file
    
    def resolve(self, profile: ConnectionProfile) -> Optional[CredentialSet]:
        """Resolve credentials for the profile's selected auth mode."""
        return self.resolve_credentials(
            mode=profile.auth_mode,
            profile_name=profile.profile_name,
            access_key=profile.access_key,
            secret_key=profile.secret_key,
            session_token=profile.session_token,
            region=profile.region,
        )
    
    def resolve_credentials(
        self,
        mode: AuthMode,
        profile_name: Optional[str] = None,
        access_key: Optional[str] = None,
        secret_key: Optional[str] = None,
        session_token: Optional[str] = None,
        region: Optional[str] = None,
    ) -> Optional[CredentialSet]:
        """
        Resolve credentials from a named profile or a static key triple.
        
        Args:
            mode: Selected auth mode; the other branch's fields are ignored
            profile_name: Named profile (profile mode)
            access_key: Static access key (static mode)
            secret_key: Static secret key (static mode)
            session_token: Optional static session token
            region: Region to scope the credentials to
            
        Returns:
            Credential set, or None in anonymous mode
            
        Raises:
            CredentialError: If the selected source cannot produce credentials
        """
        mode = AuthMode(mode)
        
        if mode == AuthMode.NONE:
            return None
        
        if mode == AuthMode.STATIC:
            if not access_key:
                raise CredentialError("Static credentials selected but the access key is empty.")
            if not secret_key:
                raise CredentialError("Static credentials selected but the secret key is empty.")
            return CredentialSet(
                access_key=access_key,
                secret_key=secret_key,
                session_token=session_token or None,
                region=region,
            )
        
        return self.resolve_profile(profile_name or DEFAULT_PROFILE, region=region)
    
    def resolve_profile(self, profile_name: str, region: Optional[str] = None) -> CredentialSet:
        """
        Load a named profile through botocore's shared-file provider chain.
        
        Args:
            profile_name: Profile to load
            region: Region override; the profile's configured region otherwise
            
        Returns:
            Frozen credential set for the profile
            
        Raises:
            CredentialError: If no store exists, the profile is absent, or it
                yields no credentials
        """
        credentials_path, config_path = _store_paths(self.credentials_file, self.config_file)
        if not credentials_path.is_file() and not config_path.is_file():
            raise CredentialError(
                f"No AWS credential store found (looked in {credentials_path} and {config_path})."
            )
        
        session = _session(credentials_path, config_path, profile_name)
        try:
            if profile_name not in session.available_profiles:
                raise CredentialError(
                    f"Profile '{profile_name}' not found in the AWS credential store."
                )
            provider = session.get_component("credential_provider")
            for method in EXCLUDED_PROVIDERS:
                provider.remove(method)
            credentials = session.get_credentials()
            frozen = credentials.get_frozen_credentials() if credentials is not None else None
            profile_region = session.get_scoped_config().get("region")
        except BotoCoreError as e:
            raise CredentialError(
                f"Could not load credentials for profile '{profile_name}': {e}"
            ) from e
        
        if frozen is None or not frozen.access_key or not frozen.secret_key:
            raise CredentialError(f"Profile '{profile_name}' did not yield any credentials.")
        
        logger.debug("Resolved credentials from profile %s via %s", profile_name, credentials.method)
        return CredentialSet(
            access_key=frozen.access_key,
            secret_key=frozen.secret_key,
            session_token=frozen.token or None,
            region=region or profile_region,
        )
    
    def list_profiles(self) -> List[str]:
        """Profile names available in this resolver's credential store."""
        return list_profiles(self.credentials_file, self.config_file)
