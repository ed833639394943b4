from .errors import UrlParseError


def parse_url(url: str) -> tuple[str, str, bool]:
    """
    Splits a URL into (authority, resource, is_encrypted).

    The first two slashes are taken as the scheme separator. Characters
    after them accumulate into the authority until a third slash, and
    everything from that slash on is the resource. The authority always
    carries a port, defaulting to 443 for https and 80 otherwise.
    """
    authority = []
    resource = []
    slashes = 0

    for c in url:
        if c == "/":
            slashes += 1
        elif slashes == 2:
            authority.append(c)
        if slashes >= 3:
            resource.append(c)

    is_encrypted = url.startswith("https://")
    authority_str = "".join(authority)
    if ":" not in authority_str:
        authority_str += ":443" if is_encrypted else ":80"

    return authority_str, "".join(resource) or "/", is_encrypted


def split_authority(authority: str) -> tuple[str, int]:
    host, _, port = authority.rpartition(":")
    try:
        return host, int(port)
    except ValueError:
        raise UrlParseError(f"Invalid port in authority '{authority}'")
