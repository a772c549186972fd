"""
Entry point for querying the service.

AIDataService stamps every request with the configured language, the local
timezone and a session id that stays the same for the lifetime of the
instance, so the service can keep conversational state between calls.

All calls block until the service answers. Do not call them from a thread
that has to stay responsive.
"""

import logging
import os
import uuid
from pathlib import Path
from typing import BinaryIO, List, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from ..config import AIConfiguration
from . import serializer
from .exceptions import InvalidArgument, ServiceError
from .models import AIContext, AIRequest, AIResponse
from .transport import HttpTransport, QueryTransport

RESET_CONTEXTS_QUERY = "empty_query_for_resetting_contexts"


def local_timezone() -> str:
    """Best-effort IANA name of the local timezone, "UTC" when unknown."""
    tz_env = os.getenv("TZ", "").lstrip(":")
    if tz_env:
        try:
            ZoneInfo(tz_env)
        except (ZoneInfoNotFoundError, ValueError):
            pass
        else:
            return tz_env

    localtime = Path("/etc/localtime")
    if localtime.is_symlink():
        target = str(localtime.resolve())
        if "zoneinfo/" in target:
            return target.split("zoneinfo/", 1)[1]

    timezone_file = Path("/etc/timezone")
    if timezone_file.is_file():
        name = timezone_file.read_text(encoding="utf-8").strip()
        if name:
            return name

    return "UTC"


class AIDataService:
    """Sends text and voice queries and parses the answers."""

    def __init__(
        self,
        config: AIConfiguration,
        transport: Optional[QueryTransport] = None,
        logger: Optional[logging.Logger] = None,
    ):
        """
        Initialize the service.

        Args:
            config: Connection settings
            transport: Any QueryTransport; an HttpTransport is created when omitted
            logger: Diagnostic sink; defaults to this module's logger
        """
        self.config = config
        self.logger = logger or logging.getLogger(__name__)
        self.transport = transport or HttpTransport(config, logger=self.logger)
        self._session_id = str(uuid.uuid4())

    @property
    def session_id(self) -> str:
        return self._session_id

    def _stamp(self, request: AIRequest) -> None:
        request.language = self.config.language
        request.session_id = self._session_id
        request.timezone = self.config.timezone or local_timezone()

    def _parse(self, response_json: str) -> AIResponse:
        if not response_json:
            raise ServiceError("Empty response from ai service. Please check configuration.")
        self.logger.debug(f"Response json: {response_json}")
        return serializer.decode(response_json)

    def request(self, request: AIRequest) -> AIResponse:
        """
        Send a text query.

        Args:
            request: Query to send; language, session id and timezone are overwritten

        Returns:
            Parsed service answer

        Raises:
            InvalidArgument: If request is None
            ServiceError: If the service can't be reached or answers with an empty body
            DecodeError: If the answer is not valid JSON of the expected shape
        """
        if request is None:
            raise InvalidArgument("Request argument must not be None")

        self.logger.debug("Start request")
        self._stamp(request)
        request_json = serializer.encode(request)
        self.logger.debug(f"Request json: {request_json}")

        return self._parse(self.transport.text_request(request_json))

    def voice_request(self, voice_stream: BinaryIO, contexts: Optional[List[AIContext]] = None) -> AIResponse:
        """
        Send recorded audio for recognition and query processing.

        Args:
            voice_stream: Readable binary stream with the audio
            contexts: Contexts to send along with the audio

        Returns:
            Parsed service answer

        Raises:
            InvalidArgument: If voice_stream is None
            ServiceError: If the service can't be reached or answers with an empty body
            DecodeError: If the answer is not valid JSON of the expected shape
        """
        if voice_stream is None:
            raise InvalidArgument("Voice stream argument must not be None")

        self.logger.debug("Start voice request")
        request = AIRequest()
        self._stamp(request)
        if contexts is not None:
            request.contexts = list(contexts)
        request_json = serializer.encode(request)
        self.logger.debug(f"Request json: {request_json}")

        return self._parse(self.transport.voice_request(voice_stream, request_json))

    def reset_contexts(self) -> bool:
        """
        Forget all contexts of the current session.

        Returns:
            True if the service confirmed the reset, False on any failure
        """
        clean_request = AIRequest(query=RESET_CONTEXTS_QUERY, reset_contexts=True)
        try:
            response = self.request(clean_request)
        except Exception:
            self.logger.error("Exception while contexts clean.", exc_info=True)
            return False
        return response is not None and not response.is_error

    def close(self):
        """Release the transport."""
        close = getattr(self.transport, "close", None)
        if close is not None:
            close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()
