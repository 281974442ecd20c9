"""
Shared data models for the navigator.
"""

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


DEFAULT_TEXT_FIELDS = ["name^2", "description", "metadata.*", "*"]


class AuthMode(str, Enum):
    """How outbound requests are authenticated."""

    PROFILE = "profile"
    STATIC = "static"
    NONE = "none"


class FilterOperator(str, Enum):
    """Operators a field filter can use."""

    EQ = "eq"
    NEQ = "neq"
    CONTAINS = "contains"
    GT = "gt"
    GTE = "gte"
    LT = "lt"
    LTE = "lte"
    EXISTS = "exists"


class DistanceUnit(str, Enum):
    KM = "km"
    MI = "mi"


class ConnectionProfile(BaseModel):
    """
    Where and how to reach the search engine.
    
    Only the fields of the selected auth mode are read; the other branch
    is ignored without validation.
    """
    
    nodes: List[str] = Field(default_factory=list)
    region: str = "us-east-1"
    auth_mode: AuthMode = AuthMode.PROFILE
    profile_name: Optional[str] = "default"
    access_key: Optional[str] = None
    secret_key: Optional[str] = None
    session_token: Optional[str] = None
    index: str = "logs-v1"
    geo_field: str = "location"
    text_fields: List[str] = Field(default_factory=lambda: list(DEFAULT_TEXT_FIELDS))
    demo_mode: bool = False
    timeout: Optional[float] = None  # Per-attempt seconds; None uses settings


class GeoFilter(BaseModel):
    """Radius filter around a point."""
    
    enabled: bool = False
    latitude: float = 34.0522
    longitude: float = -118.2437
    radius: float = 50
    unit: DistanceUnit = DistanceUnit.KM
    # Overrides the connection profile's geo field when set
    geo_field: Optional[str] = None


class FieldFilter(BaseModel):
    """A single user-defined field condition. Value is always text here."""
    
    id: str
    field: str
    operator: FilterOperator
    value: str = ""


class FilterState(BaseModel):
    """UI-neutral search intent: text, geo, field filters and paging."""
    
    model_config = ConfigDict(populate_by_name=True)
    
    query: str = ""
    geo: GeoFilter = Field(default_factory=GeoFilter)
    field_filters: List[FieldFilter] = Field(default_factory=list, alias="fieldFilters")
    offset: int = Field(default=0, alias="from")
    size: int = 20


class FieldDefinition(BaseModel):
    """A leaf field of an index mapping."""
    
    path: str
    type: Optional[str] = None


class CredentialSet(BaseModel):
    """Resolved credentials. Built per call and never persisted."""
    
    access_key: str
    secret_key: str
    session_token: Optional[str] = None
    region: Optional[str] = None
    service: Optional[str] = None
    
    def __repr__(self) -> str:
        return f"CredentialSet(access_key={self.access_key[:4]}..., region={self.region!r})"
    
    __str__ = __repr__


class CollectionRecord(BaseModel):
    """A serverless collection found by discovery."""
    
    name: str
    id: str
    endpoint: str


class DiscoveryResult(BaseModel):
    """Outcome of a successful discovery call, possibly with zero collections."""
    
    region: str
    collections: List[CollectionRecord] = Field(default_factory=list)
    
    @property
    def is_empty(self) -> bool:
        return not self.collections


class Hit(BaseModel):
    id: str
    index: str
    score: Optional[float] = None
    source: Dict[str, Any] = Field(default_factory=dict)


class SearchPage(BaseModel):
    """One page of search results plus a pagination echo."""
    
    total: int = 0
    total_relation: str = "exact"  # exact | approximate
    took: Optional[int] = None
    hits: List[Hit] = Field(default_factory=list)
    offset: int = 0
    size: int = 0


class IndexInfo(BaseModel):
    index: str
    health: Optional[str] = None
    status: Optional[str] = None
    docs_count: Optional[int] = None
    store_size: Optional[str] = None


class GatewayResponse(BaseModel):
    """A 2xx response received from one node."""
    
    status: int
    data: Any = None
    node: str
