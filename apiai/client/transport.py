"""
HTTP transport for the query service.

Two request shapes are supported:
- Text queries: JSON body posted with Content-Type application/json
- Voice queries: multipart/form-data body with a "request" JSON field and a
  "voiceData" file field carrying the audio

The response body is returned as text whatever the HTTP status, so that a
JSON error payload from the service reaches the caller as data. Only failures
to talk to the server at all are raised.
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import BinaryIO, Dict, Optional, Protocol

import requests
from requests.exceptions import RequestException

from ..config import AIConfiguration
from .exceptions import ServiceError
from .multipart import MultipartWriter

CONNECTION_ERROR_MESSAGE = (
    "Can't make request to the API.AI service. Please, check connection settings and API access token."
)


class QueryTransport(Protocol):
    """Anything that can carry serialized queries to the service."""

    def text_request(self, request_json: str) -> str: ...

    def voice_request(self, voice_stream: BinaryIO, request_json: str) -> str: ...


class HttpTransport:
    """Posts serialized requests to the configured query endpoint."""

    def __init__(
        self,
        config: AIConfiguration,
        session: Optional[requests.Session] = None,
        logger: Optional[logging.Logger] = None,
    ):
        """
        Initialize the transport.

        Args:
            config: Connection settings
            session: requests session to use; a new one is created when omitted
            logger: Diagnostic sink; defaults to this module's logger
        """
        self.config = config
        self.session = session or requests.Session()
        self.logger = logger or logging.getLogger(__name__)

    def _auth_headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.config.api_key}",
            "ocp-apim-subscription-key": self.config.subscription_key,
            "Accept": "application/json",
        }

    def text_request(self, request_json: str) -> str:
        """
        Send a JSON query.

        Args:
            request_json: Serialized request

        Returns:
            Response body text

        Raises:
            ServiceError: If the request could not be made
        """
        headers = self._auth_headers()
        headers["Content-Type"] = "application/json; charset=utf-8"
        return self._post(request_json.encode("utf-8"), headers)

    def voice_request(self, voice_stream: BinaryIO, request_json: str) -> str:
        """
        Send a voice query as multipart/form-data.

        Args:
            voice_stream: Readable binary stream with the recorded audio
            request_json: Serialized request sent in the "request" field

        Returns:
            Response body text

        Raises:
            ServiceError: If the request could not be made or the audio could not be read
        """
        writer = MultipartWriter()
        try:
            writer.add_form_part("request", request_json)
            writer.add_file_part("voiceData", "voice.wav", voice_stream)
        except OSError as e:
            self.logger.error("Can't read voice data", exc_info=True)
            raise ServiceError("Can't read voice data", e) from e
        body = writer.to_bytes()

        if self.config.write_sound_log:
            self._write_sound_log(body)

        headers = self._auth_headers()
        headers["Content-Type"] = writer.content_type
        return self._post(body, headers)

    def _post(self, body: bytes, headers: Dict[str, str]) -> str:
        url = self.config.question_url
        try:
            with self.session.post(url, data=body, headers=headers, timeout=self.config.timeout) as response:
                text = response.content.decode("utf-8", errors="replace")
                if not response.ok:
                    self.logger.debug("Service answered %s: %s", response.status_code, text)
                return text
        except RequestException as e:
            self.logger.error(CONNECTION_ERROR_MESSAGE, exc_info=True)
            raise ServiceError(CONNECTION_ERROR_MESSAGE, e) from e

    def _write_sound_log(self, body: bytes) -> Optional[Path]:
        """Keep a copy of an outgoing voice request for diagnostics."""
        log_dir = Path(self.config.sound_log_dir)
        log_path = log_dir / f"voice_request_{datetime.now().strftime('%Y%m%d_%H%M%S_%f')}.multipart"
        try:
            log_dir.mkdir(parents=True, exist_ok=True)
            log_path.write_bytes(body)
        except OSError as e:
            self.logger.warning(f"Can't write sound log to {log_path}: {e}")
            return None
        self.logger.debug(f"Sound log written to {log_path}")
        return log_path

    def close(self):
        """Close the underlying session; aborts requests in progress on other threads."""
        self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()
