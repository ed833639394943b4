import io
import logging

from .decoder import Decoder, Encoding
from .errors import HttpParseError
from .headers import Headers
from .http_protocol import HttpProtocol, Request, Response, Status, method_text
from .transport import Transport


logger = logging.getLogger(__name__)

MISSING_STATUS_CODE = 503
MISSING_STATUS_REASON = "Server did not provide a status line"

_BODYLESS_STATUS_CODES = (204, 304)


class _TransportReader(io.RawIOBase):
    """Raw stream view of a connected transport. Closing it closes the transport."""

    def __init__(self, transport: Transport) -> None:
        self._transport = transport

    def readable(self) -> bool:
        return True

    def readinto(self, buffer) -> int:
        return self._transport.read_into(buffer)

    def close(self) -> None:
        if not self.closed:
            try:
                self._transport.close()
            finally:
                super().close()


class BodyReader(io.RawIOBase):
    """
    The unread remainder of a response stream.

    With a length, reads stop after that many bytes and a connection that
    closes early is an error. Without one, reads run until the peer closes.
    """

    def __init__(self, stream: io.BufferedReader, length: int | None) -> None:
        self._stream = stream
        self._remaining = length

    def readable(self) -> bool:
        return True

    def readinto(self, buffer) -> int:
        if self._remaining == 0:
            return 0

        view = memoryview(buffer)
        if self._remaining is not None and len(view) > self._remaining:
            view = view[:self._remaining]
        if not view:
            return 0

        n = self._stream.readinto1(view)
        if self._remaining is not None:
            if n == 0:
                raise HttpParseError("Connection closed before full content length was received.")
            self._remaining -= n
        return n

    def close(self) -> None:
        if not self.closed:
            try:
                self._stream.close()
            finally:
                super().close()


def parse_status_line(line: str) -> tuple[Status, str]:
    """
    Returns the status and the first word of the reason phrase. A missing
    or unparsable line yields the synthetic 503 instead of an error.
    """
    parts = line.rstrip("\r\n").split(" ")
    if len(parts) >= 3:
        try:
            code = int(parts[1])
        except ValueError:
            pass
        else:
            return Status(code), parts[2]

    logger.warning("Unusable status line %r, substituting %d", line, MISSING_STATUS_CODE)
    return Status(MISSING_STATUS_CODE), MISSING_STATUS_REASON


def _body_length(headers: Headers, status: Status, method) -> int | None:
    if method is not None and method_text(method) == "HEAD":
        return 0
    if status.code < 200 or status.code in _BODYLESS_STATUS_CODES:
        return 0

    value = headers.get("Content-Length")
    if value is None:
        return None

    try:
        length = int(value.strip())
    except ValueError:
        raise HttpParseError("Invalid Content-Length value")
    if length < 0:
        raise HttpParseError("Invalid Content-Length value")
    return length


def parse_response(stream: io.BufferedReader, method=None) -> Response:
    """
    Parses the status line and header block from ``stream``.

    Nothing past the blank line ending the headers is read: the stream
    itself, now positioned at the first body byte, becomes the body.
    """
    status_line = stream.readline()
    status, reason = parse_status_line(status_line.decode("latin-1"))
    headers = Headers()

    # EOF reads as an empty line and ends the block like the blank separator.
    while status_line:
        line = stream.readline().decode("latin-1").strip()
        if not line:
            break

        key, sep, value = line.partition(":")
        if not sep:
            raise HttpParseError(f"Malformed header line: {line!r}")
        headers[key] = value.strip()

    logger.debug("Received %s %s with %d headers", status, reason, len(headers))

    length = _body_length(headers, status, method)
    body = BodyReader(stream, length)
    # A bodyless reply has nothing to inflate, whatever its Content-Encoding says.
    if length == 0:
        decoder = Decoder(Encoding.IDENTITY, body)
    else:
        decoder = Decoder.detect(headers, body)

    return Response(
        status=status,
        reason_phrase=reason,
        headers=headers,
        body=decoder,
    )


class Http1Protocol(HttpProtocol):
    def __init__(self, transport: Transport):
        self._transport: Transport = transport

    def connect(self, host: str, port: int) -> None:
        self._transport.connect(host, port)

    def disconnect(self) -> None:
        self._transport.close()

    def perform_request(self, request: Request) -> Response:
        """
        Writes the whole request, then parses the reply. The returned
        response owns the transport; closing it closes the connection.
        """
        self._transport.write(request.to_bytes())
        logger.debug("Sent %s to %s", request.request_line(), request.host)

        stream = io.BufferedReader(_TransportReader(self._transport))
        return parse_response(stream, request.method)
