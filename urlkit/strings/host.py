from typing import Self

from urlkit.core.strings import ValidatedStr

REGEX_SCHEME = r"[a-z][a-z0-9+.\-]*"
REGEX_HOST_LABEL = r"[^;:@=/?#.\s\\]+"
REGEX_HOST_TLD = r"[a-zA-Z0-9\-]{2,}"
REGEX_HOST = rf"(?:{REGEX_HOST_LABEL}\.)+{REGEX_HOST_TLD}"


class Scheme(ValidatedStr):
    """
    The lowercase scheme of an absolute `Url`, without the "://" delimiter.
    Callers are expected to lowercase the raw token before decoding it.
    """

    @classmethod
    def _schema_examples(cls) -> list[str]:
        return ["http", "https"]

    @classmethod
    def _schema_regex(cls) -> str:
        return REGEX_SCHEME

    def is_secure(self) -> bool:
        return self == "https"


class HostName(ValidatedStr):
    """
    A domain-like host: one or more labels, each followed by ".", then a final
    alphanumeric label of at least 2 chars.  Lowercased when decoded, so
    "www.Example.COM" and "www.example.com" are the same host.

    NOTE: IP literals and single-label hosts such as "localhost" are rejected.
    """

    @classmethod
    def _parse(cls, v: str) -> Self:
        return cls(v.lower())

    @classmethod
    def _schema_examples(cls) -> list[str]:
        return [
            "example.com",
            "www.example.com",
            "foo.bar.example.us",
        ]

    @classmethod
    def _schema_regex(cls) -> str:
        return REGEX_HOST

    def labels(self) -> list[str]:
        return self.split(".")

    def domain(self) -> str:
        """
        The last two labels of the host, e.g., "foo.example.com" gives
        "example.com".
        """
        return ".".join(self.labels()[-2:])
