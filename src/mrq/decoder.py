import io
import zlib
from enum import Enum

from .errors import DecompressionError


_READ_CHUNK_SIZE = 8192

_ENCODING_HEADERS = ("Content-Encoding", "Transfer-Encoding")


class Encoding(Enum):
    IDENTITY = "identity"
    GZIP = "gzip"
    DEFLATE = "deflate"


class Decoder(io.RawIOBase):
    """
    Readable body stream that undoes the response's content coding.

    The variant is fixed at construction. IDENTITY forwards reads to the
    wrapped source untouched; GZIP and DEFLATE inflate the source
    incrementally, so nothing is read until the caller asks for bytes.
    """

    def __init__(self, encoding: Encoding, source) -> None:
        self.encoding = encoding
        self._source = source
        self._pending = b""
        self._exhausted = False

        if encoding is Encoding.GZIP:
            self._inflater = zlib.decompressobj(16 + zlib.MAX_WBITS)
        elif encoding is Encoding.DEFLATE:
            self._inflater = zlib.decompressobj()
        else:
            self._inflater = None

    @classmethod
    def detect(cls, headers, source) -> "Decoder":
        """
        Picks the variant from Content-Encoding, falling back to
        Transfer-Encoding. On gzip or deflate the encoding header and
        Content-Length are removed from ``headers`` in place.
        """
        for name in _ENCODING_HEADERS:
            if name in headers:
                value = headers[name].strip()
                break
        else:
            return cls(Encoding.IDENTITY, source)

        if value == "gzip":
            encoding = Encoding.GZIP
        elif value == "deflate":
            encoding = Encoding.DEFLATE
        else:
            return cls(Encoding.IDENTITY, source)

        del headers[name]
        headers.pop("Content-Length", None)
        return cls(encoding, source)

    def readable(self) -> bool:
        return True

    def readinto(self, buffer) -> int:
        if self._inflater is None:
            return self._source.readinto(buffer)

        while not self._pending:
            if self._exhausted:
                return 0
            self._fill()

        n = min(len(buffer), len(self._pending))
        buffer[:n] = self._pending[:n]
        self._pending = self._pending[n:]
        return n

    def _fill(self) -> None:
        if self._inflater.eof:
            self._exhausted = True
            return

        chunk = self._source.read(_READ_CHUNK_SIZE)
        try:
            if chunk:
                self._pending = self._inflater.decompress(chunk)
                return
            self._pending = self._inflater.flush()
        except zlib.error as e:
            raise DecompressionError(f"Invalid {self.encoding.value} body: {e}") from e

        self._exhausted = True
        if not self._inflater.eof:
            raise DecompressionError(f"Truncated {self.encoding.value} body")

    def close(self) -> None:
        if not self.closed:
            try:
                self._source.close()
            finally:
                super().close()
