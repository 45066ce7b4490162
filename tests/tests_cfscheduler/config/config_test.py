from __future__ import annotations
import pytest

from cfscheduler.config import (
    ConfigurationError,
    DistributionSelector,
    InvalidatorConfig,
    parse_bool,
    parse_object_paths,
)


@pytest.mark.parametrize(
    "value,expected",
    [
        ("/*", ["/*"]),
        ("/images/*,/css/*", ["/images/*", "/css/*"]),
        ("/index.html", ["/index.html"]),
        ("/a,,/b", ["/a", "", "/b"]),
        ("", ["/*"]),
    ],
)
def test_parse_object_paths(value: str, expected: list[str]) -> None:
    """Test paths are split on commas and an empty value selects everything."""
    assert parse_object_paths(value) == expected


@pytest.mark.parametrize("value", ["*", ""])
def test_selector_wildcard(value: str) -> None:
    """Test * and the empty string select all distributions."""
    assert DistributionSelector.from_string(value).is_wildcard


def test_selector_explicit() -> None:
    """Test explicit ids keep their order and are not validated."""
    selector = DistributionSelector.from_string("d1,d2,d3")
    assert not selector.is_wildcard
    assert selector.ids == ["d1", "d2", "d3"]

    # A star among explicit ids is not a wildcard
    assert not DistributionSelector.from_string("E1,*").is_wildcard


def test_from_env_defaults() -> None:
    """Test the configuration defaults."""
    config = InvalidatorConfig.from_env({})
    assert config.distribution_ids == "*"
    assert config.object_paths == "/*"
    assert config.continue_on_error is False
    assert config.log_level == "INFO"
    assert config.region is None
    assert config.selector.is_wildcard
    assert config.paths == ["/*"]


def test_from_env() -> None:
    """Test reading the configuration from the environment."""
    config = InvalidatorConfig.from_env(
        {
            "DISTRIBUTION_IDS": "E123,E456",
            "OBJECT_PATHS": "/images/*,/css/*",
            "CONTINUE_ON_ERROR": "True",
            "LOG_LEVEL": "debug",
            "AWS_DEFAULT_REGION": "eu-west-1",
        }
    )
    assert config.selector.ids == ["E123", "E456"]
    assert config.paths == ["/images/*", "/css/*"]
    assert config.continue_on_error is True
    assert config.log_level == "DEBUG"
    assert config.region == "eu-west-1"


def test_from_env_os_environ(monkeypatch: pytest.MonkeyPatch) -> None:
    """Test os.environ is used by default."""
    monkeypatch.setenv("DISTRIBUTION_IDS", "")
    monkeypatch.setenv("OBJECT_PATHS", "")
    config = InvalidatorConfig.from_env()
    assert config.selector.is_wildcard
    assert config.paths == ["/*"]


def test_from_env_invalid_log_level() -> None:
    """Test an unknown log level is rejected."""
    with pytest.raises(ConfigurationError, match="invalid log level"):
        InvalidatorConfig.from_env({"LOG_LEVEL": "verbose"})


@pytest.mark.parametrize(
    "value,expected",
    [("true", True), ("1", True), ("YES", True), ("false", False), ("", False)],
)
def test_parse_bool(value: str, expected: bool) -> None:
    """Test boolean parsing."""
    assert parse_bool("CONTINUE_ON_ERROR", value) is expected


def test_parse_bool_invalid() -> None:
    """Test an invalid boolean is rejected."""
    with pytest.raises(ConfigurationError, match="CONTINUE_ON_ERROR"):
        InvalidatorConfig.from_env({"CONTINUE_ON_ERROR": "maybe"})
