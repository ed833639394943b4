import io

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Protocol

from .errors import InvalidRequestError
from .headers import Headers
from .url import parse_url


class Method(Enum):
    GET = "GET"
    HEAD = "HEAD"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    CONNECT = "CONNECT"
    OPTIONS = "OPTIONS"
    TRACE = "TRACE"
    PATCH = "PATCH"


@dataclass(frozen=True)
class CustomMethod:
    """A verb outside Method. Embedded in the request line as-is, unvalidated."""
    verb: str


def method_text(method: Method | CustomMethod) -> str:
    if isinstance(method, CustomMethod):
        return method.verb
    return method.value


# --- Status Codes ---
class StatusBand(Enum):
    INFORMATIONAL = 1
    SUCCESS = 2
    REDIRECT = 3
    CLIENT_ERROR = 4
    SERVER_ERROR = 5

    @classmethod
    def from_code(cls, code: int) -> "StatusBand":
        if 100 <= code < 200:
            return cls.INFORMATIONAL
        if 200 <= code < 300:
            return cls.SUCCESS
        if 300 <= code < 400:
            return cls.REDIRECT
        if 400 <= code < 500:
            return cls.CLIENT_ERROR
        # Anything outside 100-599 lands here too.
        return cls.SERVER_ERROR


@dataclass(frozen=True)
class Status:
    code: int

    @property
    def band(self) -> StatusBand:
        return StatusBand.from_code(self.code)

    def is_success(self) -> bool:
        return self.band is StatusBand.SUCCESS

    def is_redirect(self) -> bool:
        return self.band is StatusBand.REDIRECT

    def __int__(self) -> int:
        return self.code

    def __str__(self) -> str:
        return str(self.code)


@dataclass
class Request:
    """
    An unsent HTTP request.

    Every ``with_*`` method returns a new Request and leaves the receiver
    untouched, so a request is fully configured before ``send`` is called.
    A request can be sent only once.
    """
    method: Method | CustomMethod
    host: str
    resource: str = "/"
    headers: dict[str, str] = field(default_factory=dict)
    body: bytes | None = None
    timeout: float | None = None
    https: bool = False
    _sent: bool = field(default=False, init=False, repr=False, compare=False)

    @classmethod
    def from_url(cls, method: Method | CustomMethod, url: str) -> "Request":
        host, resource, https = parse_url(url)
        return cls(method=method, host=host, resource=resource, https=https)

    def with_header(self, key: str, value: str) -> "Request":
        return replace(self, headers={**self.headers, key: value})

    def with_headers(self, headers: dict[str, str]) -> "Request":
        return replace(self, headers={**self.headers, **headers})

    def with_body(self, body: str | bytes) -> "Request":
        if isinstance(body, str):
            body = body.encode("utf-8")
        request = replace(self, body=body)
        return request.with_header("Content-Length", str(len(body)))

    def with_timeout(self, seconds: float) -> "Request":
        return replace(self, timeout=seconds)

    def redirected_to(self, location: str) -> "Request":
        """
        Builds the follow-up request for a redirect. A location carrying a
        scheme replaces host, resource and scheme; anything else is a path
        on the current host. The body and its Content-Length never follow.
        """
        headers = {k: v for k, v in self.headers.items() if k.lower() != "content-length"}

        if "://" in location:
            host, resource, https = parse_url(location)
            return replace(self, host=host, resource=resource, https=https, headers=headers, body=None)

        if not location.startswith("/"):
            location = "/" + location
        return replace(self, resource=location, headers=headers, body=None)

    def request_line(self) -> str:
        return f"{method_text(self.method)} {self.resource} HTTP/1.1"

    def to_bytes(self) -> bytes:
        head = f"{self.request_line()}\r\nHost: {self.host}\r\n"
        for key, value in self.headers.items():
            head += f"{key}: {value}\r\n"
        head += "\r\n"

        data = head.encode("utf-8")
        if self.body is not None:
            data += self.body
        return data

    def send(self) -> "Response":
        if self._sent:
            raise InvalidRequestError("Request has already been sent.")
        self._sent = True

        from .connection import Connection
        return Connection(self).send()


@dataclass
class Response:
    status: Status
    reason_phrase: str
    headers: Headers
    body: io.RawIOBase

    @property
    def status_code(self) -> int:
        return self.status.code

    def read(self) -> bytes:
        return self.body.read()

    def text(self, encoding: str = "utf-8") -> str:
        return self.read().decode(encoding, errors="replace")

    def close(self) -> None:
        self.body.close()

    def __enter__(self) -> "Response":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def __repr__(self) -> str:
        return (
            f"Response(status={self.status.code}, reason_phrase={self.reason_phrase!r}, "
            f"headers={dict(self.headers.items())!r}, body=<stream>)"
        )


class HttpProtocol(Protocol):
    def perform_request(self, request: Request) -> Response:
        ...
