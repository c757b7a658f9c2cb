from urllib.parse import urljoin

from pydantic import AnyUrl, TypeAdapter, ValidationError

url_adapter = TypeAdapter(AnyUrl)


def resolve_url(base: str, reference: str) -> str | None:
    """Resolve ``reference`` against ``base``.

    Absolute references replace the base entirely; scheme-relative,
    path-relative and fragment-only references are joined the usual way.
    The result is normalized (lowercase host, default port dropped, dot
    segments removed, unsafe characters percent-encoded). Returns None when
    the reference cannot be parsed or the joined URL is not valid.
    """
    try:
        joined = urljoin(base, reference.strip())
        return str(url_adapter.validate_python(joined))
    except (ValueError, ValidationError):
        # e.g. an unbalanced IPv6 netloc such as "http://[::1", or an empty host
        return None
