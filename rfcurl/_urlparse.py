"""
An implementation of `urlparse` that strictly validates URL references
as described by RFC3986.

We rely on this implementation rather than the one in Python's stdlib, because:

* Malformed percent-escapes and control characters are rejected, rather than
  being passed through and interpreted differently by some other component.
* It properly differentiates between an empty querystring and an absent querystring,
  to distinguish URLs with a trailing '?'.
* It distinguishes "scheme:/path" from "scheme:///path" and "scheme:path".
* It handles IPv6 literals with zone identifiers, as described by RFC6874.

The parse proceeds in order: control characters, scheme, query, the choice
between opaque and hierarchical forms, authority, and finally the path.
"""

import logging
import typing

from ._encoding import (
    Encoding,
    escape,
    string_contains_ctl_byte,
    string_contains_lone_surrogate,
    unescape,
    valid_optional_port,
    valid_userinfo,
)
from ._exceptions import (
    ControlCharacter,
    EmptyURL,
    InvalidEncoding,
    InvalidPort,
    InvalidRequestURI,
    InvalidURL,
    InvalidUserinfo,
    MissingCloseBracket,
    MissingScheme,
    PathUnexpectedColon,
    URLError,
)
from ._urls import ParsedURL, Userinfo

logger = logging.getLogger("rfcurl")

# scheme = ALPHA *( ALPHA / DIGIT / "+" / "-" / "." )
SCHEME_ALPHA = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz"
SCHEME_TRAILING = "0123456789+-."


def parse(url: str) -> ParsedURL:
    """
    Parse a URL reference, which may be absolute or relative.

    A "#fragment" suffix is split off before anything else, and the fragment
    is percent-decoded. Trying to parse a hostname and path without a scheme
    is not an error, but the hostname will be treated as part of the path.
    """
    url_part, sep, frag = url.partition("#")
    try:
        if string_contains_ctl_byte(frag):
            raise ControlCharacter()
        parsed = _parse(url_part, via_request=False)
        if sep:
            parsed = _set_fragment(parsed, frag)
    except InvalidURL as exc:
        logger.debug("Rejected URL %r: %s (%s)", url, exc, exc.kind)
        raise URLError("parse", url, exc) from exc
    return parsed


def parse_request_uri(url: str) -> ParsedURL:
    """
    Parse a URL received as the target of an HTTP request.

    Only absolute URLs and absolute paths are allowed. The URL is assumed
    not to have a fragment, so any "#" is kept as part of the path or query.
    """
    try:
        parsed = _parse(url, via_request=True)
    except InvalidURL as exc:
        logger.debug("Rejected request URI %r: %s (%s)", url, exc, exc.kind)
        raise URLError("parse", url, exc) from exc
    return parsed


def _parse(url: str, via_request: bool) -> ParsedURL:
    """
    Parse a URL without a fragment.

    When `via_request` is `True` only absolute URLs or path-absolute
    references are allowed, otherwise any relative reference is accepted.
    """
    if string_contains_ctl_byte(url):
        raise ControlCharacter()

    if string_contains_lone_surrogate(url):
        raise InvalidEncoding()

    if url == "" and via_request:
        raise EmptyURL()

    if url == "*":
        return ParsedURL(path="*")

    # Split off possible leading "http:", "mailto:", etc.
    # Cannot contain escaped characters.
    scheme, rest = get_scheme(url)
    scheme = scheme.lower()

    force_query = False
    raw_query = ""
    if rest.endswith("?") and rest.count("?") == 1:
        force_query = True
        rest = rest[:-1]
    else:
        rest, _, raw_query = rest.partition("?")

    if not rest.startswith("/"):
        if scheme:
            # Rootless paths are considered opaque.
            return ParsedURL(
                scheme=scheme,
                opaque=rest,
                force_query=force_query,
                raw_query=raw_query,
            )
        if via_request:
            raise InvalidRequestURI()

        # https://datatracker.ietf.org/doc/html/rfc3986.html#section-3.3
        # The first segment of a relative-path reference cannot contain a
        # colon, which avoids confusion with malformed schemes such as
        # "cache_object:foo/bar".
        segment, _, _ = rest.partition("/")
        if ":" in segment:
            raise PathUnexpectedColon()

    user: typing.Optional[Userinfo] = None
    host = ""
    omit_host = False
    if (scheme or not via_request and not rest.startswith("///")) and rest.startswith(
        "//"
    ):
        authority = rest[2:]
        rest = ""
        idx = authority.find("/")
        if idx >= 0:
            authority, rest = authority[:idx], authority[idx:]
        user, host = parse_authority(authority)
    elif scheme and rest.startswith("/"):
        # The authority is empty, as in "file:/etc/hosts".
        omit_host = True

    path, raw_path = _decode_with_hint(rest, Encoding.PATH)

    return ParsedURL(
        scheme=scheme,
        user=user,
        host=host,
        omit_host=omit_host,
        path=path,
        raw_path=raw_path,
        force_query=force_query,
        raw_query=raw_query,
    )


def _set_fragment(parsed: ParsedURL, frag: str) -> ParsedURL:
    fragment, raw_fragment = _decode_with_hint(frag, Encoding.FRAGMENT)
    return parsed._replace(fragment=fragment, raw_fragment=raw_fragment)


def _decode_with_hint(raw: str, mode: Encoding) -> typing.Tuple[str, str]:
    # The raw form is only kept when it can't be recovered by escaping the
    # decoded value, so that callers don't come to rely on it.
    decoded = unescape(raw, mode)
    if escape(decoded, mode) == raw:
        return decoded, ""
    return decoded, raw


def get_scheme(url: str) -> typing.Tuple[str, str]:
    """
    Split a leading "scheme:" from the URL, returning `(scheme, rest)`.

    If the URL doesn't begin with a valid scheme then `("", url)` is returned.
    """
    for idx, char in enumerate(url):
        if char in SCHEME_ALPHA:
            continue
        elif char in SCHEME_TRAILING:
            if idx == 0:
                return "", url
        elif char == ":":
            if idx == 0:
                raise MissingScheme()
            return url[:idx], url[idx + 1 :]
        else:
            # We have encountered an invalid character,
            # so there is no valid scheme.
            return "", url
    return "", url


def parse_authority(authority: str) -> typing.Tuple[typing.Optional[Userinfo], str]:
    """
    Parse "userinfo@host:port", returning `(user, host)`.

    The host follows the last "@", so that an unescaped "@" in the userinfo
    can never change which host is used.
    """
    idx = authority.rfind("@")
    host = parse_host(authority[idx + 1 :])
    if idx < 0:
        return None, host

    userinfo = authority[:idx]
    if not valid_userinfo(userinfo):
        raise InvalidUserinfo()

    if ":" not in userinfo:
        return Userinfo(unescape(userinfo, Encoding.USER_PASSWORD)), host

    username, _, password = userinfo.partition(":")
    user = Userinfo(
        unescape(username, Encoding.USER_PASSWORD),
        unescape(password, Encoding.USER_PASSWORD),
    )
    return user, host


def parse_host(host: str) -> str:
    """
    Parse and decode a "host[:port]" authority without user information.
    """
    if host.startswith("["):
        # Parse an IP-literal, as described by RFC3986 and RFC6874.
        # Eg. "[fe80::1]", "[fe80::1%25en0]", "[fe80::1]:80".
        idx = host.rfind("]")
        if idx < 0:
            raise MissingCloseBracket()

        colon_port = host[idx + 1 :]
        if not valid_optional_port(colon_port):
            raise InvalidPort(colon_port)

        # "%25" introduces the zone identifier, which may use any
        # %-encoding it likes, unlike the host which can only %-encode
        # non-ASCII bytes.
        zone = host.find("%25", 0, idx)
        if zone >= 0:
            host1 = unescape(host[:zone], Encoding.HOST)
            host2 = unescape(host[zone:idx], Encoding.ZONE)
            host3 = unescape(host[idx:], Encoding.HOST)
            return host1 + host2 + host3
    else:
        idx = host.rfind(":")
        if idx != -1:
            colon_port = host[idx:]
            if not valid_optional_port(colon_port):
                raise InvalidPort(colon_port)

    return unescape(host, Encoding.HOST)
