"""
Client library for an API.AI-style natural language query service.

Main components:
- AIConfiguration: API keys, language and endpoint, resolved from arguments, .env or defaults
- AIDataService: sends text and voice queries and parses the JSON answers
- HttpTransport: plain JSON and multipart/form-data POSTs over requests

Example usage:
    from apiai import AIConfiguration, AIDataService, AIRequest

    config = AIConfiguration.from_env(language="en")
    with AIDataService(config) as service:
        response = service.request(AIRequest(query="hello"))
        print(response.result.fulfillment.speech)
"""

from .client import (
    AIContext,
    AIDataService,
    AIRequest,
    AIResponse,
    AIServiceException,
    DecodeError,
    HttpTransport,
    InvalidArgument,
    ServiceError,
)
from .config import AIConfiguration, ConfigManager, configure_logging

__all__ = [
    "AIConfiguration",
    "ConfigManager",
    "configure_logging",
    "AIDataService",
    "HttpTransport",
    "AIContext",
    "AIRequest",
    "AIResponse",
    "AIServiceException",
    "InvalidArgument",
    "ServiceError",
    "DecodeError",
]
