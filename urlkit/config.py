import dotenv
import logging
import os

dotenv.load_dotenv()


class ParsingConfig:
    default_scheme: str = (os.getenv("URLKIT_DEFAULT_SCHEME") or "http").lower()
    """
    The scheme implied by a bare host, e.g., "example.com" is read as
    "http://example.com/".  Scheme-relative input ("//example.com") never
    receives a default scheme.
    """


class UrlkitConfig:
    environment = os.getenv("ENVIRONMENT", "local")

    # Logging
    verbose = max(0, min(4, int(os.getenv("DEBUG_VERBOSE") or "0")))
    """
    - When empty or <= 0, verbose logs are disabled.
    - When >= 1, enable debugging logs, including rejected URLs.
    """
    log_level = logging.DEBUG if verbose else logging.INFO

    parsing = ParsingConfig()

    @classmethod
    def is_kubernetes(cls) -> bool:
        return cls.environment in ("prod", "test", "dev")
