"""
Client package for sending text and voice queries to the query service.
"""

from .data_service import AIDataService
from .exceptions import AIServiceException, DecodeError, InvalidArgument, ServiceError
from .models import AIContext, AIRequest, AIResponse, Fulfillment, Metadata, Result, Status
from .multipart import MultipartWriter
from .transport import HttpTransport

__all__ = [
    "AIDataService",
    "HttpTransport",
    "MultipartWriter",
    "AIContext",
    "AIRequest",
    "AIResponse",
    "Result",
    "Status",
    "Metadata",
    "Fulfillment",
    "AIServiceException",
    "InvalidArgument",
    "ServiceError",
    "DecodeError",
]
