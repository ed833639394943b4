import logging
import os

from .errors import ConfigurationError, TooManyRedirectsError
from .http1_protocol import Http1Protocol
from .http_protocol import Request, Response
from .tcp_transport import TcpTransport
from .tls_transport import HAS_TLS, TlsTransport
from .transport import Transport
from .url import split_authority


logger = logging.getLogger(__name__)

TIMEOUT_ENV_VAR = "MRQ_TIMEOUT"
DEFAULT_MAX_REDIRECTS = 10


def resolve_timeout(explicit: float | None) -> float | None:
    """
    The request's own timeout wins; otherwise MRQ_TIMEOUT in whole
    seconds; otherwise no timeout. Unparsable or non-positive values in
    the environment are ignored.
    """
    if explicit is not None:
        return explicit

    try:
        timeout = int(os.environ[TIMEOUT_ENV_VAR])
    except (KeyError, ValueError):
        return None
    return timeout if timeout > 0 else None


class Connection:
    """
    Sends one request and follows its redirects.

    Every hop opens a fresh transport. A redirect response with a Location
    header is closed and replaced by a request to that location, up to
    ``max_redirects`` hops. Any other response, including a redirect
    without Location, is returned as-is.
    """

    def __init__(self, request: Request, max_redirects: int = DEFAULT_MAX_REDIRECTS) -> None:
        self.request = request
        self.timeout = resolve_timeout(request.timeout)
        self.max_redirects = max_redirects

    def send(self) -> Response:
        request = self.request
        hops = 0

        while True:
            response = self._dispatch(request)
            if not response.status.is_redirect():
                return response

            location = response.headers.get("Location")
            if location is None:
                return response

            response.close()
            if hops >= self.max_redirects:
                raise TooManyRedirectsError(
                    f"Exceeded {self.max_redirects} redirects, last Location was '{location}'"
                )

            hops += 1
            logger.debug("Redirect %d (%s) to %s", hops, response.status, location)
            request = request.redirected_to(location)

    def _dispatch(self, request: Request) -> Response:
        if request.https and not HAS_TLS:
            raise ConfigurationError(
                "Can't send requests to https:// URLs: this Python has no ssl support."
            )

        host, port = split_authority(request.host)
        transport = self._open_transport(request)
        protocol = Http1Protocol(transport)

        try:
            protocol.connect(host, port)
            return protocol.perform_request(request)
        except Exception:
            protocol.disconnect()
            raise

    def _open_transport(self, request: Request) -> Transport:
        if request.https:
            return TlsTransport(self.timeout)
        return TcpTransport(self.timeout)
