"""
Builder for multipart/form-data request bodies.

Parts are kept in the order they are added and rendered with a single
boundary token by urllib3's form encoder. Text parts are encoded as UTF-8;
binary parts are copied verbatim from a byte stream or a bytes object.
"""

import uuid
from typing import BinaryIO, List, Optional, Tuple, Union

from urllib3.fields import guess_content_type
from urllib3.filepost import encode_multipart_formdata


class MultipartWriter:
    """Ordered sequence of named form parts sharing one boundary."""

    def __init__(self, boundary: Optional[str] = None):
        """
        Initialize the writer.

        Args:
            boundary: Boundary token; a random one is generated when omitted
        """
        self.boundary = boundary or f"----apiai{uuid.uuid4().hex}"
        self._fields: List[Tuple[str, Union[str, Tuple[str, bytes, str]]]] = []

    @property
    def content_type(self) -> str:
        """Value for the Content-Type request header."""
        return f"multipart/form-data; boundary={self.boundary}"

    @property
    def part_names(self) -> List[str]:
        """Field names in the order they will be written."""
        return [name for name, _ in self._fields]

    def add_form_part(self, name: str, value: str) -> "MultipartWriter":
        """Add a text field."""
        self._fields.append((name, value))
        return self

    def add_file_part(
        self,
        name: str,
        filename: str,
        stream: Union[BinaryIO, bytes, bytearray],
        content_type: Optional[str] = None,
    ) -> "MultipartWriter":
        """
        Add a file field whose body is copied from a byte stream.

        Args:
            name: Form field name
            filename: Logical file name sent to the server
            stream: Readable binary stream or bytes
            content_type: Part content type; guessed from the file name when omitted
        """
        data = bytes(stream) if isinstance(stream, (bytes, bytearray)) else stream.read()
        self._fields.append((name, (filename, data, content_type or guess_content_type(filename))))
        return self

    def to_bytes(self) -> bytes:
        """Render all parts followed by the closing boundary."""
        body, _ = encode_multipart_formdata(self._fields, boundary=self.boundary)
        return body
