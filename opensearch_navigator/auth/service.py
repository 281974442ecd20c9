"""
Signing service classification.

Serverless collections and managed domains sign under different service
names. A request must be signed with the same name its host expects, or
the engine rejects it.
"""

from urllib.parse import urlsplit


SERVERLESS_SERVICE = "aoss"
MANAGED_SERVICE = "es"
SERVERLESS_HOST_SUFFIX = ".aoss.amazonaws.com"


def classify_service(url: str) -> str:
    """
    Derive the signing service name from a URL.
    
    Args:
        url: Absolute URL or bare hostname
        
    Returns:
        "aoss" for serverless collection hosts, "es" otherwise
    """
    host = urlsplit(url).hostname if "://" in url else url.split("/")[0].split(":")[0]
    host = (host or "").lower().rstrip(".")
    
    if host.endswith(SERVERLESS_HOST_SUFFIX):
        return SERVERLESS_SERVICE
    return MANAGED_SERVICE
