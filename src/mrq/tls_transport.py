import logging

try:
    import ssl
except ImportError:  # interpreter built without OpenSSL
    ssl = None

from .errors import TransportError, TlsHandshakeError
from .tcp_transport import TcpTransport


logger = logging.getLogger(__name__)

HAS_TLS = ssl is not None


class TlsTransport(TcpTransport):
    """
    TCP transport wrapped in a TLS session.

    The certificate chain is verified against the context's trust store
    (the system roots by default) and the host name is checked. Timeouts
    are set on the raw socket before the handshake, so they bound the
    handshake and every later record read or write.
    """

    def __init__(self, timeout: float | None = None, context=None) -> None:
        if not HAS_TLS:
            raise TransportError("TLS transport requires the ssl module.")
        super().__init__(timeout)
        self._context = context if context is not None else ssl.create_default_context()

    def connect(self, host: str, port: int) -> None:
        super().connect(host, port)

        try:
            self._sock = self._context.wrap_socket(self._sock, server_hostname=host)
        except OSError as e:
            self._discard()
            raise TlsHandshakeError(f"TLS handshake with '{host}' failed: {e}") from e

        logger.debug("TLS session established with %s (%s)", host, self._sock.version())
