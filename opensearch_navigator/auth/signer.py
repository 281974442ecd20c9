"""
AWS Signature Version 4 request signing for httpx requests.

The httpx request is mirrored into a botocore AWSRequest, signed with
SigV4Auth, and the resulting authentication headers are copied back.
"""

import httpx
from botocore.auth import SigV4Auth
from botocore.awsrequest import AWSRequest
from botocore.credentials import Credentials

from opensearch_navigator.core.models import CredentialSet


CONTENT_SHA256_HEADER = "X-Amz-Content-SHA256"

# Transport-managed headers that must not be part of the signature
UNSIGNED_HEADERS = ("content-length", "accept-encoding", "connection", "user-agent", "accept")


class SigV4Signer:
    """
    Signs requests for OpenSearch Service ("es") and Serverless ("aoss").
    
    Serverless rejects requests without a payload hash header, so one is
    added and signed by default.
    """
    
    def __init__(self, include_content_sha256: bool = True):
        self.include_content_sha256 = include_content_sha256
    
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
            New request carrying Authorization, X-Amz-Date and, when the
            credentials are temporary, X-Amz-Security-Token
        """
        body = request.read()
        headers = {
            name: value
            for name, value in request.headers.items()
            if name.lower() not in UNSIGNED_HEADERS
        }
        aws_request = AWSRequest(
            method=request.method.upper(),
            url=str(request.url),
            data=body,
            headers=headers,
        )
        
        auth = SigV4Auth(
            Credentials(credentials.access_key, credentials.secret_key, credentials.session_token),
            service,
            region,
        )
        if self.include_content_sha256:
            aws_request.headers[CONTENT_SHA256_HEADER] = auth.payload(aws_request)
        auth.add_auth(aws_request)
        
        signed = httpx.Headers(request.headers)
        for name, value in aws_request.headers.items():
            signed[name] = value
        
        return httpx.Request(
            request.method,
            request.url,
            headers=signed,
            content=body or None,
            extensions=request.extensions,
        )
