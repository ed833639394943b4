class MrqError(Exception):
    """Base exception for the mrq library."""
    pass

# --- Transport Errors ---

class TransportError(MrqError):
    """A generic error occurred in the transport layer."""
    pass

class DnsFailureError(TransportError): pass
class SocketConnectError(TransportError): pass
class SocketWriteError(TransportError): pass
class SocketReadError(TransportError): pass
class SocketTimeoutError(TransportError): pass
class TlsHandshakeError(TransportError): pass

# --- HTTP Client Errors ---

class HttpClientError(MrqError):
    """A generic error occurred in the HTTP client logic."""
    pass

class UrlParseError(HttpClientError): pass
class HttpParseError(HttpClientError): pass
class InvalidRequestError(HttpClientError): pass
class DecompressionError(HttpClientError): pass

class ConfigurationError(HttpClientError):
    """An https URL was requested but this interpreter has no ssl support."""
    pass

class TooManyRedirectsError(HttpClientError):
    """The server answered with more redirects than the hop limit allows."""
    pass
