"""
Percent-encoding rules for each section of a URL, as described by RFC3986.

The same character may be literal in one section and reserved in another,
so every function here takes an `Encoding` mode naming the section being
decoded or encoded.

Decoding is strict. A host may only use %-escapes for non-ASCII bytes, with
the single exception of "%25" introducing an IPv6 zone identifier (RFC6874),
and a malformed escape is always an error rather than being passed through.
"""

import enum

from ._exceptions import (
    InvalidEncoding,
    InvalidHostCharacter,
    InvalidHostEscape,
    InvalidZoneEscape,
    MalformedEscape,
)

UPPER_HEX = "0123456789ABCDEF"

# https://datatracker.ietf.org/doc/html/rfc3986.html#section-2.3
ALPHANUMERIC = b"ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789"
UNRESERVED_MARKS = b"-_.~"

# https://datatracker.ietf.org/doc/html/rfc3986.html#section-2.2
RESERVED = b"$&+,/:;=?@"

# Host allows the sub-delims as part of a reg-name. We add ":" and "[ ]"
# because ":port" and "[ipv6]" are kept as part of the host, and "< > \""
# because they are the only characters left that could be allowed, and an
# escaped form of them would be rejected in a host.
HOST_SAFE = b"!$&'()*+,;=:[]<>\""

# Sub-delims left unescaped in a fragment. The single quote stays escaped.
FRAGMENT_SAFE = b"!()*"

USERINFO_SAFE = "-._:~!$&'()*+,;=%@"


class Encoding(enum.Enum):
    PATH = 1
    PATH_SEGMENT = 2
    HOST = 3
    ZONE = 4
    USER_PASSWORD = 5
    QUERY = 6
    QUERY_COMPONENT = 7
    FRAGMENT = 8
    FRAGMENT_COMPONENT = 9


def ishex(c: str) -> bool:
    return "0" <= c <= "9" or "a" <= c <= "f" or "A" <= c <= "F"


def unhex(c: str) -> int:
    if "0" <= c <= "9":
        return ord(c) - ord("0")
    if "a" <= c <= "f":
        return ord(c) - ord("a") + 10
    if "A" <= c <= "F":
        return ord(c) - ord("A") + 10
    return 0


def is_control_byte(c: int) -> bool:
    return c < 0x20 or c == 0x7F


def string_contains_ctl_byte(s: str) -> bool:
    """
    Return `True` if the string contains any ASCII control character.
    """
    return any(is_control_byte(ord(char)) for char in s)


def is_lone_surrogate(char: str) -> bool:
    # U+DC80 to U+DCFF carry undecodable bytes under "surrogateescape".
    return "\ud800" <= char <= "\udfff" and not "\udc80" <= char <= "\udcff"


def string_contains_lone_surrogate(s: str) -> bool:
    """
    Return `True` if the string holds a surrogate with no UTF-8 encoding.
    """
    return any(is_lone_surrogate(char) for char in s)


def valid_userinfo(s: str) -> bool:
    """
    Return `True` if `s` is made up only of characters allowed by RFC3986
    in userinfo, or a literal "@".

    https://datatracker.ietf.org/doc/html/rfc3986.html#section-3.2.1
    """
    for char in s:
        if "A" <= char <= "Z" or "a" <= char <= "z" or "0" <= char <= "9":
            continue
        if char not in USERINFO_SAFE:
            return False
    return True


def should_escape(c: int, mode: Encoding) -> bool:
    """
    Return `True` if the byte `c` must be percent-encoded when it appears in
    the section of the URL given by `mode`.
    """
    if c in ALPHANUMERIC:
        return False

    if mode in (Encoding.HOST, Encoding.ZONE) and c in HOST_SAFE:
        return False

    if c in UNRESERVED_MARKS:
        return False

    if c in RESERVED:
        # Different sections of the URL allow a few of the reserved
        # characters to appear unescaped.
        if mode == Encoding.PATH:
            # "/ ; ," are allowed since the path is handled as a whole.
            return c == ord("?")
        elif mode == Encoding.PATH_SEGMENT:
            return c in b"/;,?"
        elif mode == Encoding.USER_PASSWORD:
            # ":" separates the username from the password.
            return c in b"@/?:"
        elif mode == Encoding.FRAGMENT:
            return False
        # Query components, and hosts for "/ ? @", escape everything.
        return True

    if mode == Encoding.FRAGMENT and c in FRAGMENT_SAFE:
        return False

    return True


def unescape(s: str, mode: Encoding) -> str:
    """
    Percent-decode `s`, validating escapes against the rules for `mode`.

    "+" decodes to a space only in Encoding.QUERY_COMPONENT. If `s` holds no
    escapes the same string is returned.
    A lone surrogate, which has no UTF-8 encoding, raises InvalidEncoding.
    """
    # Count %, check that they're well-formed.
    count = 0
    has_plus = False
    idx = 0
    while idx < len(s):
        char = s[idx]
        if char == "%":
            count += 1
            if idx + 2 >= len(s) or not ishex(s[idx + 1]) or not ishex(s[idx + 2]):
                raise MalformedEscape(s[idx : idx + 3])
            escape = s[idx : idx + 3]
            # https://datatracker.ietf.org/doc/html/rfc3986.html#section-3.2.2
            # In a host %-encoding may only be used for non-ASCII bytes, but
            # https://datatracker.ietf.org/doc/html/rfc6874#section-2 allows
            # "%25" to introduce the zone of a scoped IPv6 literal.
            if mode == Encoding.HOST and unhex(s[idx + 1]) < 8 and escape != "%25":
                raise InvalidHostEscape(escape)
            if mode == Encoding.ZONE:
                # Zone escapes are restricted to bytes that would be valid in
                # a host when written directly. Windows uses spaces here.
                value = unhex(s[idx + 1]) << 4 | unhex(s[idx + 2])
                if (
                    escape != "%25"
                    and value != 0x20
                    and should_escape(value, Encoding.HOST)
                ):
                    raise InvalidZoneEscape(escape)
            idx += 3
        elif char == "+":
            has_plus = mode == Encoding.QUERY_COMPONENT
            idx += 1
        else:
            if is_lone_surrogate(char):
                raise InvalidEncoding()
            if (
                mode in (Encoding.HOST, Encoding.ZONE)
                and ord(char) < 0x80
                and should_escape(ord(char), mode)
            ):
                raise InvalidHostCharacter(char)
            idx += 1

    if count == 0 and not has_plus:
        return s

    decoded = bytearray()
    idx = 0
    while idx < len(s):
        char = s[idx]
        if char == "%":
            decoded.append(unhex(s[idx + 1]) << 4 | unhex(s[idx + 2]))
            idx += 3
            continue
        if char == "+" and mode == Encoding.QUERY_COMPONENT:
            decoded.append(0x20)
        else:
            decoded += char.encode("utf-8", "surrogateescape")
        idx += 1
    return decoded.decode("utf-8", "surrogateescape")


def escape(s: str, mode: Encoding) -> str:
    """
    Percent-encode `s` with the default escaping for `mode`.

    This is the inverse of `unescape`. Spaces become "+" in
    Encoding.QUERY_COMPONENT, everything else that needs escaping becomes
    an upper-case "%XX" sequence.
    """
    try:
        raw = s.encode("utf-8", "surrogateescape")
    except UnicodeEncodeError as exc:
        raise InvalidEncoding() from exc
    space_count = 0
    hex_count = 0
    for byte in raw:
        if should_escape(byte, mode):
            if byte == 0x20 and mode == Encoding.QUERY_COMPONENT:
                space_count += 1
            else:
                hex_count += 1

    if space_count == 0 and hex_count == 0:
        return s

    if hex_count == 0:
        return s.replace(" ", "+")

    output = []
    for byte in raw:
        if byte == 0x20 and mode == Encoding.QUERY_COMPONENT:
            output.append("+")
        elif should_escape(byte, mode):
            output.append("%" + UPPER_HEX[byte >> 4] + UPPER_HEX[byte & 15])
        else:
            output.append(chr(byte))
    return "".join(output)


def path_escape(s: str) -> str:
    """
    Escape a string so it can be placed inside a single URL path segment.
    """
    return escape(s, Encoding.PATH_SEGMENT)


def path_unescape(s: str) -> str:
    """
    Decode a single path segment. "+" is left as it is.
    """
    return unescape(s, Encoding.PATH_SEGMENT)


def query_escape(s: str) -> str:
    """
    Escape a string so it can be placed inside a query key or value.
    """
    return escape(s, Encoding.QUERY_COMPONENT)


def query_unescape(s: str) -> str:
    """
    Decode a query key or value, converting "+" into a space.
    """
    return unescape(s, Encoding.QUERY_COMPONENT)


def valid_optional_port(port: str) -> bool:
    """
    Return `True` if `port` is either empty, or ":" followed by zero
    or more ASCII digits. The value of the port is not checked.
    """
    if port == "":
        return True
    if port[0] != ":":
        return False
    return all("0" <= char <= "9" for char in port[1:])
