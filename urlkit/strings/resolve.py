"""
Browser-like resolution of a reference against a base URL.

This is deliberately simpler than RFC 3986:

- Only ".." segments are collapsed, "." segments are kept as-is.
- A reference with its own scheme replaces the base outright, even when both
  share the same authority.  A scheme-relative reference ("//host/x") inherits
  the scheme of the base only when its authority is exactly the base's, so
  "//example.com/x" against "http://example.com:80/" stays scheme-relative.
- The query and the fragment of the base are discarded as soon as the reference
  carries a path, even when the reference has no query or fragment.
"""

import logging

from urlkit.config import UrlkitConfig
from urlkit.strings.url import Url

logger = logging.getLogger(__name__)


def remove_dot_segments(path: str) -> str:
    """
    Collapse each ".." segment with the segment before it, then join what is
    left with "/".

    - The root of a path that starts with "/" is never removed: "/../a" gives
      "/a" and "/a/.." gives "/".
    - Leading ".." that cannot be collapsed in a path that does not start with
      "/" are kept: "a/../../b" gives "../b".
    - Empty segments (from "//") are kept verbatim.
    """
    rooted = path.startswith("/")

    stack: list[str] = []
    for segment in path.split("/"):
        if segment != "..":
            stack.append(segment)
        elif rooted and len(stack) == 1:
            continue
        elif stack and stack[-1] != "..":
            stack.pop()
        else:
            stack.append(segment)

    result = "/".join(stack)
    return result or ("/" if rooted else "")


def merge_paths(base_path: str, ref_path: str) -> str:
    """
    Join a reference path to the "directory" of the base path, i.e., the base
    path without its last segment.  Absolute paths replace the base path.
    """
    if ref_path.startswith("/"):
        return ref_path
    base_dir, slash, _ = base_path.rpartition("/")
    return f"{base_dir}{slash}{ref_path}"


def resolve_url(base: Url | str, ref: Url | str) -> Url | None:
    """
    Resolve `ref` against `base`, which must be an absolute URL.  Returns `None`
    when either one is invalid or when `base` is relative.
    """
    base = Url.of(base)
    if not base.is_absolute():
        if UrlkitConfig.verbose:
            logger.debug("Cannot resolve against non-absolute base: '%s'", base)
        return None
    return _resolve(base, Url.of(ref))


def reduce_url(base: Url | str, ref: Url | str) -> Url | None:
    """
    Resolve `ref` against `base`, which may be host-relative (e.g., "/foo/"),
    then drop the scheme and authority when they are the same as the base's.
    Returns `None` when either one is invalid, or when the result cannot be
    written without an authority.

    NOTE: A path starting with "//" keeps its authority, because "//evil.com/x"
    would be read back as a URL to another host.
    """
    base = Url.of(base)
    if not base.is_valid():
        return None
    resolved = _resolve(base, Url.of(ref))
    if resolved is None or not resolved.is_valid():
        return None

    if (
        resolved.is_absolute()
        and base.is_absolute()
        and resolved.scheme == base.scheme
        and resolved.authority() == base.authority()
        and not resolved.path.startswith("//")
    ):
        return resolved.with_host(None)

    return resolved


def _resolve(base: Url, ref: Url) -> Url | None:
    if not ref.is_valid():
        if UrlkitConfig.verbose:
            logger.debug("Cannot resolve invalid reference against '%s'", base)
        return None

    # A reference with its own authority never merges with the base.
    if ref.is_absolute():
        if (
            ref.scheme is None
            and base.scheme is not None
            and ref.authority() == base.authority()
        ):
            return ref.with_scheme(base.scheme)
        return ref

    if ref.path:
        path = remove_dot_segments(merge_paths(base.path, ref.path))
        return base._rebuild(path=path, query=ref.query, fragment=ref.fragment)  # noqa: SLF001
    elif ref.query:
        return base._rebuild(query=ref.query, fragment=ref.fragment)  # noqa: SLF001
    elif ref.fragment:
        return base.with_fragment(ref.fragment)
    else:
        return base
