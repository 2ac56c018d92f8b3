from .__version__ import __description__, __title__, __version__
from ._encoding import (
    Encoding,
    escape,
    path_escape,
    path_unescape,
    query_escape,
    query_unescape,
    should_escape,
    unescape,
    valid_optional_port,
)
from ._exceptions import (
    ControlCharacter,
    EmptyURL,
    EscapeError,
    InvalidEncoding,
    InvalidHostCharacter,
    InvalidHostEscape,
    InvalidPort,
    InvalidRequestURI,
    InvalidURL,
    InvalidUserinfo,
    InvalidZoneEscape,
    MalformedEscape,
    MissingCloseBracket,
    MissingScheme,
    PathUnexpectedColon,
    URLError,
)
from ._urlparse import parse, parse_request_uri
from ._urls import ParsedURL, Userinfo

__all__ = [
    "__description__",
    "__title__",
    "__version__",
    "ControlCharacter",
    "EmptyURL",
    "Encoding",
    "EscapeError",
    "InvalidEncoding",
    "InvalidHostCharacter",
    "InvalidHostEscape",
    "InvalidPort",
    "InvalidRequestURI",
    "InvalidURL",
    "InvalidUserinfo",
    "InvalidZoneEscape",
    "MalformedEscape",
    "MissingCloseBracket",
    "MissingScheme",
    "ParsedURL",
    "PathUnexpectedColon",
    "URLError",
    "Userinfo",
    "escape",
    "parse",
    "parse_request_uri",
    "path_escape",
    "path_unescape",
    "query_escape",
    "query_unescape",
    "should_escape",
    "unescape",
    "valid_optional_port",
]

