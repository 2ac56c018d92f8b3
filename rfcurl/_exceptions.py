"""
Our exception hierarchy:

* InvalidURL
  + ControlCharacter
  + InvalidEncoding
  + EmptyURL
  + MissingScheme
  + InvalidRequestURI
  + PathUnexpectedColon
  + MissingCloseBracket
  + InvalidPort
  + InvalidUserinfo
  + EscapeError
    - MalformedEscape
    - InvalidHostEscape
    - InvalidZoneEscape
    - InvalidHostCharacter
  + URLError
"""


class InvalidURL(Exception):
    """
    Base class for any URL that could not be parsed.
    """

    kind = "invalid_url"


class ControlCharacter(InvalidURL):
    kind = "control_character"

    def __init__(self) -> None:
        super().__init__("invalid control character in URL")


class InvalidEncoding(InvalidURL):
    """
    The URL holds a lone surrogate that has no UTF-8 encoding.
    """

    kind = "invalid_encoding"

    def __init__(self) -> None:
        super().__init__("invalid character encoding in URL")


class EmptyURL(InvalidURL):
    kind = "empty_url"

    def __init__(self) -> None:
        super().__init__("empty url")


class MissingScheme(InvalidURL):
    kind = "missing_scheme"

    def __init__(self) -> None:
        super().__init__("missing protocol scheme")


class InvalidRequestURI(InvalidURL):
    kind = "invalid_request_uri"

    def __init__(self) -> None:
        super().__init__("invalid URI for request")


class PathUnexpectedColon(InvalidURL):
    kind = "path_unexpected_colon"

    def __init__(self) -> None:
        super().__init__("first path segment in URL cannot contain colon")


class MissingCloseBracket(InvalidURL):
    kind = "missing_close_bracket"

    def __init__(self) -> None:
        super().__init__("missing ']' in host")


class InvalidPort(InvalidURL):
    kind = "invalid_port"

    def __init__(self, port: str) -> None:
        super().__init__(f"invalid port {port!r} after host")
        self.port = port


class InvalidUserinfo(InvalidURL):
    kind = "invalid_userinfo"

    def __init__(self) -> None:
        super().__init__("invalid userinfo")


class EscapeError(InvalidURL):
    """
    A percent-escape, or a character that required one, was rejected.

    The offending input is kept as `text`. For a malformed escape this is
    the "%" and at most two following characters of the `str`, counted as
    characters rather than UTF-8 bytes, so "%ü1" is kept whole.
    """

    kind = "escape_error"

    def __init__(self, text: str, message: str = "") -> None:
        super().__init__(message or f"invalid URL escape {text!r}")
        self.text = text


class MalformedEscape(EscapeError):
    kind = "malformed_escape"


class InvalidHostEscape(EscapeError):
    kind = "invalid_host_escape"


class InvalidZoneEscape(EscapeError):
    kind = "invalid_zone_escape"


class InvalidHostCharacter(EscapeError):
    kind = "invalid_host_character"

    def __init__(self, text: str) -> None:
        super().__init__(text, f"invalid character {text!r} in host name")


class URLError(InvalidURL):
    """
    Raised by the public entry points, recording the operation and the
    complete input alongside the underlying error.
    """

    def __init__(self, op: str, url: str, err: InvalidURL) -> None:
        super().__init__(f"{op} {url!r}: {err}")
        self.op = op
        self.url = url
        self.err = err

    @property
    def kind(self) -> str:  # type: ignore[override]
        return self.err.kind
