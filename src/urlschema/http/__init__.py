"""urlschema.http — URL and request glue.

Provides the HttpRequest context for server-side decoding, and yarl-based
helpers that split full URLs into decoder input and assemble encoder
output onto a base URL.
"""

from urlschema.http._request import HttpRequest, decode_request
from urlschema.http._url import decode_url, encode_url, route_template, split_url

__all__ = [
    # Context
    "HttpRequest",
    "decode_request",
    # URLs
    "split_url",
    "decode_url",
    "encode_url",
    "route_template",
]
