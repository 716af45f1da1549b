"""Exception hierarchy for configuration registration and resolution.

All exceptions inherit from DimConfigError, which carries a human readable
message plus the offending bundle, config or path as attributes so callers
can react without parsing the message.
"""

from enum import Enum


class CacheMissReason(str, Enum):
    """Why a resolution cache lookup did not produce a value."""

    UNKNOWN_BUNDLE = "unknown_bundle"
    UNKNOWN_CONFIG = "unknown_config"
    UNKNOWN_CACHE_DATA = "unknown_cache_data"


class DimConfigError(Exception):
    """Base exception for all dimconfig errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class UnknownBundleError(DimConfigError):
    """Raised when no config was ever registered under the bundle."""

    def __init__(self, bundle: str) -> None:
        super().__init__(f'Unknown bundle "{bundle}"')
        self.bundle = bundle


class UnknownConfigError(DimConfigError):
    """Raised when the bundle exists but the config name does not."""

    def __init__(self, bundle: str, config: str) -> None:
        super().__init__(f'Unknown config "{config}" in bundle "{bundle}"')
        self.bundle = bundle
        self.config = config


class UnknownCacheDataError(DimConfigError):
    """Raised by the resolution cache on a miss.

    Never escapes ConfigEngine; the reason is kept for diagnostics only.
    """

    def __init__(
        self,
        bundle: str,
        config: str,
        reason: CacheMissReason = CacheMissReason.UNKNOWN_CACHE_DATA,
    ) -> None:
        super().__init__(f'Unknown cache data with config "{config}" in bundle "{bundle}"')
        self.bundle = bundle
        self.config = config
        self.reason = reason


class MissingDimensionsError(DimConfigError):
    """Raised when no dimensions file has been registered or configured."""

    def __init__(self) -> None:
        super().__init__("Failed to find a dimensions file")


class ParseError(DimConfigError):
    """Raised when a config file cannot be read or parsed."""

    def __init__(self, path: str, detail: str) -> None:
        super().__init__(f'Failed to parse "{path}"\n{detail}')
        self.path = path
        self.detail = detail
