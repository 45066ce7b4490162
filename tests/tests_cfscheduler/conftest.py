"""Provide fixtures for cfscheduler tests."""

from __future__ import annotations
from typing import TYPE_CHECKING
import pytest

from botocore.exceptions import ClientError

if TYPE_CHECKING:
    from typing import Callable, Iterable, Optional
    from pytest import MonkeyPatch
    from cfscheduler.cloudfront import Distribution, InvalidationResult


@pytest.fixture(autouse=True)
def aws_env(monkeypatch: MonkeyPatch) -> None:
    """Isolate tests from the configuration of the machine running them.

    Fake credentials avoid looking for real ones when clients are created.
    """
    for name in (
        "DISTRIBUTION_IDS",
        "OBJECT_PATHS",
        "CONTINUE_ON_ERROR",
        "LOG_LEVEL",
        "AWS_PROFILE",
        "AWS_DEFAULT_REGION",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_SESSION_TOKEN", "testing")


class FakeCloudFront:
    """In-memory replacement for cfscheduler.cloudfront.CloudFront."""

    def __init__(
        self, distributions: Iterable[str] = (), failing: Iterable[str] = ()
    ) -> None:
        """Initialize FakeCloudFront.

        :param distributions: ids returned by list_distributions
        :param failing: ids for which create_invalidation raises
        """
        self.distributions = list(distributions)
        self.failing = set(failing)
        self.list_calls = 0
        self.invalidations: list[tuple[str, list[str], str]] = []

    def list_distributions(self) -> list[Distribution]:
        """Return the configured distributions."""
        self.list_calls += 1
        return [
            {
                "Id": distribution_id,
                "DomainName": f"{distribution_id.lower()}.cloudfront.net",
                "Aliases": [],
            }
            for distribution_id in self.distributions
        ]

    def create_invalidation(
        self, distribution_id: str, paths: list[str], caller_reference: str
    ) -> InvalidationResult:
        """Record the request and fail for the failing distributions."""
        self.invalidations.append((distribution_id, list(paths), caller_reference))
        if distribution_id in self.failing:
            raise ClientError(
                {
                    "Error": {
                        "Code": "NoSuchDistribution",
                        "Message": "The specified distribution does not exist.",
                    }
                },
                "CreateInvalidation",
            )
        return {
            "DistributionId": distribution_id,
            "InvalidationId": f"I{len(self.invalidations):04d}",
            "Status": "InProgress",
        }


@pytest.fixture
def fake_cloudfront() -> Callable[..., FakeCloudFront]:
    """Return a factory of in-memory CloudFront doubles."""

    def factory(
        distributions: Optional[Iterable[str]] = None,
        failing: Optional[Iterable[str]] = None,
    ) -> FakeCloudFront:
        return FakeCloudFront(distributions or (), failing or ())

    return factory
