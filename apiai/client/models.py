"""
Data models for queries sent to and answers received from the query service.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class AIContext:
    """A named bundle of parameters hinting at conversational state."""

    name: str
    parameters: Dict[str, Any] = field(default_factory=dict)
    lifespan: Optional[int] = None


@dataclass
class AIRequest:
    """
    A single query to the service.

    language, session_id and timezone are overwritten by AIDataService before
    the request is sent.
    """

    query: Optional[str] = None
    contexts: List[AIContext] = field(default_factory=list)
    session_id: Optional[str] = None
    language: Optional[str] = None
    timezone: Optional[str] = None
    reset_contexts: bool = False
    confidence: Optional[float] = None


@dataclass(frozen=True)
class Metadata:
    """Intent matched by the service."""

    intent_id: Optional[str] = None
    intent_name: Optional[str] = None


@dataclass(frozen=True)
class Fulfillment:
    """Text the service suggests speaking back to the user."""

    speech: Optional[str] = None


@dataclass(frozen=True)
class Result:
    """Service-defined outcome of a query."""

    source: Optional[str] = None
    resolved_query: Optional[str] = None
    action: Optional[str] = None
    action_incomplete: bool = False
    parameters: Dict[str, Any] = field(default_factory=dict)
    contexts: List[AIContext] = field(default_factory=list)
    metadata: Optional[Metadata] = None
    fulfillment: Optional[Fulfillment] = None


@dataclass(frozen=True)
class Status:
    """HTTP-like status the service reports inside the JSON body."""

    code: Optional[int] = None
    error_type: Optional[str] = None
    error_id: Optional[str] = None
    error_details: Optional[str] = None


@dataclass(frozen=True)
class AIResponse:
    """Parsed service answer."""

    id: Optional[str] = None
    timestamp: Optional[str] = None
    result: Optional[Result] = None
    status: Optional[Status] = None

    @property
    def is_error(self) -> bool:
        """True when the service reported a status code of 400 or above."""
        return self.status is not None and self.status.code is not None and self.status.code >= 400
