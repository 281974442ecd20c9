"""
Tests for SigV4 signing and service classification.
"""

import hashlib

import httpx

from opensearch_navigator.auth.service import classify_service
from opensearch_navigator.auth.signer import SigV4Signer
from opensearch_navigator.core.models import CredentialSet


EXAMPLE_SECRET = "wJalrXUtnFEMI/K7MDENG+bPxRfiCYEXAMPLEKEY"
EMPTY_SHA256 = "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"


def _credentials(token=None):
    return CredentialSet(access_key="AKIDEXAMPLE", secret_key=EXAMPLE_SECRET, session_token=token)


def _authorization_parts(request):
    algorithm, _, rest = request.headers["authorization"].partition(" ")
    parts = dict(part.split("=", 1) for part in rest.split(", "))
    parts["algorithm"] = algorithm
    return parts


def test_scope_carries_date_region_and_service():
    request = httpx.Request("GET", "https://abc123.eu-west-1.aoss.amazonaws.com/_cat/indices?format=json")
    
    signed = SigV4Signer().sign(request, _credentials(), "eu-west-1", "aoss")
    parts = _authorization_parts(signed)
    
    date_stamp = signed.headers["x-amz-date"][:8]
    assert parts["algorithm"] == "AWS4-HMAC-SHA256"
    assert parts["Credential"] == f"AKIDEXAMPLE/{date_stamp}/eu-west-1/aoss/aws4_request"
    assert len(parts["Signature"]) == 64
    assert str(signed.url) == str(request.url)


def test_payload_hash_is_sent_and_signed():
    request = httpx.Request(
        "POST",
        "https://search-x.us-west-2.es.amazonaws.com/logs/_search",
        headers={"content-type": "application/json"},
        content=b"{}",
    )
    
    signed = SigV4Signer().sign(request, _credentials(), "us-west-2", "es")
    signed_headers = _authorization_parts(signed)["SignedHeaders"].split(";")
    
    assert signed.headers["x-amz-content-sha256"] == hashlib.sha256(b"{}").hexdigest()
    assert "x-amz-content-sha256" in signed_headers
    assert "content-type" in signed_headers
    assert "host" in signed_headers


def test_payload_hash_can_be_left_out():
    request = httpx.Request("GET", "https://example.amazon.com/")
    
    signed = SigV4Signer(include_content_sha256=False).sign(request, _credentials(), "us-east-1", "es")
    
    assert "x-amz-content-sha256" not in signed.headers
    assert _authorization_parts(signed)["SignedHeaders"] == "host;x-amz-date"


def test_empty_body_hashes_to_empty_digest():
    request = httpx.Request("GET", "https://node.example.com/_search")
    
    signed = SigV4Signer().sign(request, _credentials(), "us-east-1", "aoss")
    
    assert signed.headers["x-amz-content-sha256"] == EMPTY_SHA256


def test_different_service_changes_signature():
    signer = SigV4Signer()
    request = httpx.Request("GET", "https://node.example.com/_search")
    
    es = signer.sign(request, _credentials(), "us-east-1", "es")
    aoss = signer.sign(request, _credentials(), "us-east-1", "aoss")
    
    assert _authorization_parts(es)["Signature"] != _authorization_parts(aoss)["Signature"]


def test_session_token_is_sent_and_signed():
    request = httpx.Request("GET", "https://node.example.com/")
    
    signed = SigV4Signer().sign(request, _credentials(token="TOKEN"), "us-east-1", "es")
    
    assert signed.headers["x-amz-security-token"] == "TOKEN"
    assert "x-amz-security-token" in _authorization_parts(signed)["SignedHeaders"].split(";")


def test_target_header_is_signed():
    request = httpx.Request(
        "POST",
        "https://aoss.us-east-1.amazonaws.com/",
        headers={
            "content-type": "application/x-amz-json-1.0",
            "x-amz-target": "OpenSearchServerless.ListCollections",
        },
        content=b"{}",
    )
    
    signed = SigV4Signer().sign(request, _credentials(), "us-east-1", "aoss")
    
    assert "x-amz-target" in _authorization_parts(signed)["SignedHeaders"].split(";")
    assert signed.headers["x-amz-target"] == "OpenSearchServerless.ListCollections"


def test_signed_request_keeps_body_and_extensions():
    timeout = httpx.Timeout(5.0).as_dict()
    request = httpx.Request(
        "POST", "https://node.example.com/idx/_search", content=b"{}", extensions={"timeout": timeout}
    )
    
    signed = SigV4Signer().sign(request, _credentials(), "us-east-1", "es")
    
    assert signed.content == b"{}"
    assert signed.method == "POST"
    assert signed.extensions["timeout"] == timeout


def test_classify_service():
    assert classify_service("https://abc123.us-east-1.aoss.amazonaws.com") == "aoss"
    assert classify_service("https://abc123.us-east-1.aoss.amazonaws.com:443/idx/_search") == "aoss"
    assert classify_service("https://aoss.us-east-1.amazonaws.com/") == "es"
    assert classify_service("https://search-d.us-east-1.es.amazonaws.com") == "es"
    assert classify_service("http://localhost:9200") == "es"
    assert classify_service("ABC.us-east-1.AOSS.amazonaws.com") == "aoss"
