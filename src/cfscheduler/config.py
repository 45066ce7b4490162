"""Provide parsing of the invalidation scheduler configuration."""

from __future__ import annotations
from typing import TYPE_CHECKING
import logging
import os

from cfscheduler import CFSchedulerError

if TYPE_CHECKING:
    from typing import Optional
    from collections.abc import Mapping

WILDCARD = "*"
"""Distribution selector meaning every distribution visible to the caller."""

DEFAULT_OBJECT_PATH = "/*"

DEFAULT_LOG_LEVEL = "INFO"

_TRUE_VALUES = ("true", "1", "yes", "on")
_FALSE_VALUES = ("false", "0", "no", "off", "")


class ConfigurationError(CFSchedulerError):
    """Raised when an environment variable holds an invalid value."""


class DistributionSelector:
    """Select either explicit distributions or all of them."""

    def __init__(self, ids: list[str]) -> None:
        """Initialize a DistributionSelector.

        :param ids: the comma-split configuration value. ``["*"]`` and
            ``[""]`` select all distributions
        """
        self.ids = ids

    @classmethod
    def from_string(cls, value: str) -> DistributionSelector:
        """Parse a comma-separated list of distribution ids.

        :param value: ids separated by commas, ``*`` or an empty string for all
        :return: the selector
        """
        return cls(value.split(","))

    @property
    def is_wildcard(self) -> bool:
        """Return True if all the distributions are selected."""
        return self.ids in ([WILDCARD], [""])

    def __repr__(self) -> str:
        """Return a representation of the selected ids."""
        return f"DistributionSelector({self.ids!r})"


def parse_object_paths(value: str) -> list[str]:
    """Parse a comma-separated list of object paths.

    The paths are kept as is, an empty value selects every object.

    :param value: path patterns separated by commas, e.g. ``/images/*,/css/*``
    :return: the list of paths to invalidate, never empty
    """
    paths = value.split(",")
    if paths == [""]:
        paths = [DEFAULT_OBJECT_PATH]
    return paths


def parse_bool(name: str, value: str) -> bool:
    """Parse a boolean environment value.

    :param name: name of the variable, for error reporting
    :param value: the value
    :raise ConfigurationError: if the value is not a boolean
    :return: the parsed value
    """
    normalized = value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    elif normalized in _FALSE_VALUES:
        return False
    raise ConfigurationError(
        f"invalid boolean {value!r} for {name}", origin="parse_bool"
    )


class InvalidatorConfig:
    """Configuration of an invalidation run."""

    def __init__(
        self,
        distribution_ids: str = WILDCARD,
        object_paths: str = DEFAULT_OBJECT_PATH,
        continue_on_error: bool = False,
        log_level: str = DEFAULT_LOG_LEVEL,
        region: Optional[str] = None,
    ) -> None:
        """Initialize an InvalidatorConfig.

        :param distribution_ids: comma-separated distribution ids, or ``*``
        :param object_paths: comma-separated object paths
        :param continue_on_error: if True a failed invalidation does not stop
            the following ones
        :param log_level: level of the cfscheduler logger
        :param region: region of the CloudFront client, None for default
        """
        self.distribution_ids = distribution_ids
        self.object_paths = object_paths
        self.continue_on_error = continue_on_error
        self.log_level = log_level
        self.region = region

    @classmethod
    def from_env(
        cls, environ: Optional[Mapping[str, str]] = None
    ) -> InvalidatorConfig:
        """Read the configuration from environment variables.

        :param environ: the environment, os.environ if None
        :raise ConfigurationError: if a variable holds an invalid value
        :return: the configuration
        """
        if environ is None:
            environ = os.environ

        log_level = environ.get("LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()
        if not isinstance(logging.getLevelName(log_level), int):
            raise ConfigurationError(
                f"invalid log level {log_level!r}", origin="InvalidatorConfig"
            )

        return cls(
            distribution_ids=environ.get("DISTRIBUTION_IDS", WILDCARD),
            object_paths=environ.get("OBJECT_PATHS", DEFAULT_OBJECT_PATH),
            continue_on_error=parse_bool(
                "CONTINUE_ON_ERROR", environ.get("CONTINUE_ON_ERROR", "false")
            ),
            log_level=log_level,
            region=environ.get("AWS_DEFAULT_REGION") or None,
        )

    @property
    def selector(self) -> DistributionSelector:
        """Return the distribution selector."""
        return DistributionSelector.from_string(self.distribution_ids)

    @property
    def paths(self) -> list[str]:
        """Return the object paths to invalidate."""
        return parse_object_paths(self.object_paths)
