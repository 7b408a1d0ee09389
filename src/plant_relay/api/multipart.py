"""Streaming multipart reader that keeps the uploaded image in memory."""

from dataclasses import dataclass, field

from fastapi import Request
from python_multipart.exceptions import MultipartParseError
from python_multipart.multipart import MultipartParser, parse_options_header

from plant_relay.domain.errors import UploadRejection, UploadValidationError
from plant_relay.services.uploads import TOO_LARGE_MESSAGE

# Room for boundaries, part headers and small extra fields around the file.
MULTIPART_OVERHEAD_BYTES = 64 * 1024


@dataclass(frozen=True)
class FilePart:
    """Raw file part pulled out of a multipart body."""

    content: bytes
    content_type: str | None
    filename: str | None


@dataclass
class _FilePartCollector:
    """Parser callbacks that buffer the first file part named ``field_name``."""

    field_name: str
    limit: int
    content: bytearray = field(default_factory=bytearray)
    content_type: str | None = None
    filename: str | None = None
    started: bool = False
    capturing: bool = False
    _headers: dict[bytes, bytes] = field(default_factory=dict)
    _header_field: bytearray = field(default_factory=bytearray)
    _header_value: bytearray = field(default_factory=bytearray)

    def callbacks(self) -> dict[str, object]:
        return {
            "on_part_begin": self.on_part_begin,
            "on_header_field": self.on_header_field,
            "on_header_value": self.on_header_value,
            "on_header_end": self.on_header_end,
            "on_headers_finished": self.on_headers_finished,
            "on_part_data": self.on_part_data,
            "on_part_end": self.on_part_end,
        }

    def on_part_begin(self) -> None:
        self._headers = {}

    def on_header_field(self, data: bytes, start: int, end: int) -> None:
        self._header_field.extend(data[start:end])

    def on_header_value(self, data: bytes, start: int, end: int) -> None:
        self._header_value.extend(data[start:end])

    def on_header_end(self) -> None:
        self._headers[bytes(self._header_field).lower()] = bytes(self._header_value)
        self._header_field.clear()
        self._header_value.clear()

    def on_headers_finished(self) -> None:
        _, options = parse_options_header(self._headers.get(b"content-disposition"))
        name = options.get(b"name", b"").decode("utf-8", errors="replace")
        if self.started or name != self.field_name or b"filename" not in options:
            return
        self.started = True
        self.capturing = True
        self.filename = options[b"filename"].decode("utf-8", errors="replace")
        declared = self._headers.get(b"content-type", b"").decode("latin-1")
        self.content_type = declared or None

    def on_part_data(self, data: bytes, start: int, end: int) -> None:
        room = self.limit + 1 - len(self.content)
        if self.capturing and room > 0:
            self.content.extend(data[start : min(end, start + room)])

    def on_part_end(self) -> None:
        self.capturing = False


async def read_file_part(
    request: Request, field_name: str, limit: int
) -> FilePart | None:
    """Stream the request body and buffer at most ``limit + 1`` file bytes.

    Returns None when the body is not multipart or has no file under
    ``field_name``. Reading stops as soon as the file exceeds ``limit``.
    """
    content_length = request.headers.get("content-length", "")
    if content_length.isdigit() and int(content_length) > (
        limit + MULTIPART_OVERHEAD_BYTES
    ):
        raise UploadValidationError(UploadRejection.TOO_LARGE, TOO_LARGE_MESSAGE)
    media_type, options = parse_options_header(request.headers.get("content-type"))
    if media_type != b"multipart/form-data" or b"boundary" not in options:
        return None

    collector = _FilePartCollector(field_name=field_name, limit=limit)
    parser = MultipartParser(options[b"boundary"], callbacks=collector.callbacks())
    try:
        async for chunk in request.stream():
            parser.write(chunk)
            if len(collector.content) > limit:
                break
        else:
            parser.finalize()
    except MultipartParseError as exc:
        raise UploadValidationError(
            UploadRejection.MISSING_FILE, "Malformed multipart body"
        ) from exc

    if not collector.started:
        return None
    return FilePart(
        content=bytes(collector.content),
        content_type=collector.content_type,
        filename=collector.filename,
    )
