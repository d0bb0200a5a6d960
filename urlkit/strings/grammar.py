"""
Grammar of loosely-formed URLs.

The input is first trimmed, then the discriminator (`guess_kind`) decides which
decomposition to attempt:

- "absolute" when it starts with "scheme://" or "//";
- "relative" when it starts with "/", "?", "#" or "." (dot-segments);
- otherwise, when it starts with a plausible host character, absolute is tried
  first (bare host shorthand, e.g. "example.com") and relative second.

Each component has its own scanner, which takes the input and a position and
returns the captured value with the position where it stopped.  Scanners raise
`ValueError` when a component is present but malformed, which aborts the whole
absolute decomposition: a bad port is never reinterpreted as a path.

NOTE: Whitespace is rejected inside the scheme, the authority and the port, but
kept verbatim inside the path, the query and the fragment.
"""

import re

from dataclasses import dataclass
from typing import Literal

from urlkit.config import UrlkitConfig
from urlkit.strings.host import REGEX_HOST, REGEX_SCHEME

UrlKind = Literal["absolute", "relative"]

REGEX_USER_INFO = r"[^:@/?#\s]+(?::[^:@/?#\s]+)?"

RE_AUTHORITY_PREFIX = re.compile(rf"(?:({REGEX_SCHEME}):)?//", re.IGNORECASE)
RE_RELATIVE_PREFIX = re.compile(r"[/?#.]")
RE_HOST_CANDIDATE = re.compile(r"[^;:@=\s]")

RE_USER_INFO = re.compile(rf"({REGEX_USER_INFO})@")
RE_HOST = re.compile(rf"({REGEX_HOST})(?=[:/?#]|\Z)", re.IGNORECASE)
RE_PORT = re.compile(r":([0-9]+)(?=[/?#]|\Z)")
RE_PATH = re.compile(r"[^?#]*")
RE_QUERY = re.compile(r"\?([^#]*)")
RE_FRAGMENT = re.compile(r"#(.*)", re.DOTALL)


@dataclass(frozen=True, kw_only=True)
class UrlMatch:
    """
    The raw components captured by a successful decomposition, before they are
    turned into a `Url` (which decodes the query string).
    """

    kind: UrlKind
    scheme: str | None = None
    user_info: str | None = None
    host: str | None = None
    port: int | None = None
    path: str = ""
    query: str | None = None
    fragment: str | None = None


##
## Discriminator
##


def guess_kind(raw: str) -> UrlKind | None:
    """
    Return the kind implied by the prefix of a trimmed input, or `None` when it
    must be decided by trying both decompositions (or when it is unparseable,
    see `is_host_candidate`).
    """
    if RE_AUTHORITY_PREFIX.match(raw):
        return "absolute"
    elif RE_RELATIVE_PREFIX.match(raw):
        return "relative"
    else:
        return None


def is_host_candidate(raw: str) -> bool:
    return bool(RE_HOST_CANDIDATE.match(raw))


##
## Scanners
##


def scan_scheme(raw: str, pos: int = 0) -> tuple[str | None, int]:
    """
    Capture the optional "scheme://" or "//" prefix.  Without any prefix (bare
    host), the configured default scheme is implied; with a "//" prefix alone
    (scheme-relative), there is no scheme at all.
    """
    if not (match := RE_AUTHORITY_PREFIX.match(raw, pos)):
        return UrlkitConfig.parsing.default_scheme, pos
    elif scheme := match.group(1):
        return scheme.lower(), match.end()
    else:
        return None, match.end()


def scan_user_info(raw: str, pos: int) -> tuple[str | None, int]:
    if match := RE_USER_INFO.match(raw, pos):
        return match.group(1), match.end()
    return None, pos


def scan_host(raw: str, pos: int) -> tuple[str, int]:
    if not (match := RE_HOST.match(raw, pos)):
        raise ValueError("bad host")
    return match.group(1), match.end()


def scan_port(raw: str, pos: int) -> tuple[int | None, int]:
    if not raw.startswith(":", pos):
        return None, pos
    if not (match := RE_PORT.match(raw, pos)):
        raise ValueError("bad port")
    return int(match.group(1)), match.end()


def scan_path(raw: str, pos: int) -> tuple[str, int]:
    match = RE_PATH.match(raw, pos)
    assert match is not None
    return match.group(0), match.end()


def scan_query(raw: str, pos: int) -> tuple[str | None, int]:
    """A "?" followed by nothing captures no query."""
    if match := RE_QUERY.match(raw, pos):
        return match.group(1) or None, match.end()
    return None, pos


def scan_fragment(raw: str, pos: int) -> tuple[str | None, int]:
    """A "#" followed by nothing captures no fragment."""
    if match := RE_FRAGMENT.match(raw, pos):
        return match.group(1) or None, match.end()
    return None, pos


##
## Decompositions
##


def match_absolute(raw: str) -> UrlMatch:
    scheme, pos = scan_scheme(raw)
    user_info, pos = scan_user_info(raw, pos)
    host, pos = scan_host(raw, pos)
    port, pos = scan_port(raw, pos)
    path, pos = scan_path(raw, pos)
    query, pos = scan_query(raw, pos)
    fragment, pos = scan_fragment(raw, pos)
    assert pos == len(raw)

    return UrlMatch(
        kind="absolute",
        scheme=scheme,
        user_info=user_info,
        host=host,
        port=port,
        path=path or "/",
        query=query,
        fragment=fragment,
    )


def match_relative(raw: str) -> UrlMatch:
    """
    Decompose a URL without authority.  A path starting with "//" is rejected,
    as it would be read back as the authority of an absolute URL.
    """
    if raw.startswith("//"):
        raise ValueError("ambiguous path")

    path, pos = scan_path(raw, 0)
    query, pos = scan_query(raw, pos)
    fragment, pos = scan_fragment(raw, pos)
    assert pos == len(raw)

    return UrlMatch(kind="relative", path=path, query=query, fragment=fragment)


def match_url(raw: str, kind: UrlKind | None = None) -> UrlMatch:
    """
    Decompose `raw` into its components, following the discriminator unless
    `kind` forces a decomposition.

    Raises `ValueError` (with the reason of the failure) when the input does not
    match any decomposition that was attempted.
    """
    raw = raw.strip()
    if not raw:
        raise ValueError("empty")

    kind = kind or guess_kind(raw)
    if kind == "absolute":
        return match_absolute(raw)
    elif kind == "relative":
        return match_relative(raw)
    elif is_host_candidate(raw):
        try:
            return match_absolute(raw)
        except ValueError:
            return match_relative(raw)
    else:
        raise ValueError("unrecognized leading character")
