import logging
import socket

from .errors import (
    TransportError,
    DnsFailureError,
    SocketConnectError,
    SocketWriteError,
    SocketReadError,
    SocketTimeoutError,
)
from .transport import Transport


logger = logging.getLogger(__name__)


class TcpTransport(Transport):
    def __init__(self, timeout: float | None = None) -> None:
        self._sock: socket.socket | None = None
        self._timeout = timeout

    def connect(self, host: str, port: int) -> None:
        if self._sock is not None:
            raise TransportError("Transport is already connected.")

        # An empty host would silently mean INADDR_ANY to connect().
        if not host:
            raise DnsFailureError("DNS Failure for host ''")

        try:
            self._sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
            # Applies to connect() as well as every later send/recv.
            self._sock.settimeout(self._timeout)
            self._sock.connect((host, port))
            self._sock.setsockopt(socket.IPPROTO_TCP, socket.TCP_NODELAY, 1)
        except socket.gaierror as e:
            self._discard()
            raise DnsFailureError(f"DNS Failure for host '{host}'") from e
        except TimeoutError as e:
            self._discard()
            raise SocketTimeoutError(f"Connecting to {host}:{port} timed out") from e
        except OSError as e:
            self._discard()
            raise SocketConnectError(f"Socket connection failed: {e}") from e

        logger.debug("Connected to %s:%d (timeout=%s)", host, port, self._timeout)

    def write(self, data: bytes) -> int:
        if self._sock is None:
            raise TransportError("Cannot write on a disconnected transport.")

        try:
            self._sock.sendall(data)
        except TimeoutError as e:
            raise SocketTimeoutError("Socket write timed out") from e
        except OSError as e:
            raise SocketWriteError(f"Socket write failed: {e}") from e
        return len(data)

    def read_into(self, buffer: bytearray | memoryview) -> int:
        if self._sock is None:
            raise TransportError("Cannot read from a disconnected transport.")

        try:
            return self._sock.recv_into(buffer)
        except TimeoutError as e:
            raise SocketTimeoutError("Socket read timed out") from e
        except OSError as e:
            raise SocketReadError(f"Socket read failed: {e}") from e

    def close(self) -> None:
        if self._sock is not None:
            try:
                self._sock.close()
            finally:
                self._sock = None

    def _discard(self) -> None:
        if self._sock is not None:
            self._sock.close()
        self._sock = None
