from typing import Iterable
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

SECRET_QUERY_KEYS = ("key", "api_key", "token")


def mask_value(value: str) -> str:
    if not isinstance(value, str):
        return value
    if '@' in value:  # email
        name, _, domain = value.partition('@')
        return (name[:2] + '***@' + domain) if name else '***@' + domain
    if len(value) > 12:
        return value[:4] + '...' + value[-4:]
    return '***'


def mask_url(url: str, secret_keys: Iterable[str] = SECRET_QUERY_KEYS) -> str:
    """Return the url with secret query parameters masked, safe to log."""
    parts = urlsplit(url)
    if not parts.query:
        return url
    secret_keys = set(secret_keys)
    query = [(k, mask_value(v) if k in secret_keys else v) for k, v in parse_qsl(parts.query, keep_blank_values=True)]
    return urlunsplit(parts._replace(query=urlencode(query, safe="*.")))
