from .http_protocol import CustomMethod, Method, Request


def create_request(method: Method | CustomMethod, url: str) -> Request:
    """Builds an unsent request. Call ``send()`` on it to get a Response."""
    return Request.from_url(method, url)


def get(url: str) -> Request:
    return create_request(Method.GET, url)


def head(url: str) -> Request:
    return create_request(Method.HEAD, url)


def post(url: str) -> Request:
    return create_request(Method.POST, url)


def put(url: str) -> Request:
    return create_request(Method.PUT, url)


def delete(url: str) -> Request:
    return create_request(Method.DELETE, url)


def connect(url: str) -> Request:
    return create_request(Method.CONNECT, url)


def options(url: str) -> Request:
    return create_request(Method.OPTIONS, url)


def trace(url: str) -> Request:
    return create_request(Method.TRACE, url)


def patch(url: str) -> Request:
    return create_request(Method.PATCH, url)
