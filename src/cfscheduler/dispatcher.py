from __future__ import annotations
from typing import TYPE_CHECKING, TypedDict
import logging

from cfscheduler import CFSchedulerError
from cfscheduler.cloudfront import caller_reference as default_caller_reference
from cfscheduler.config import (
    DEFAULT_OBJECT_PATH,
    WILDCARD,
    DistributionSelector,
    parse_object_paths,
)

if TYPE_CHECKING:
    from typing import Callable, Optional
    from cfscheduler.cloudfront import CloudFront, InvalidationResult

logger = logging.getLogger("cfscheduler.dispatcher")

DISPATCH_SUCCESS_STATUS = 200


class DispatchResponse(TypedDict):
    """Represent the result of a dispatch, as returned to the scheduler."""

    statusCode: int
    body: list[str]
    """Ids of the distributions processed."""
    invalidations: list[InvalidationResult]


class InvalidationDispatchError(CFSchedulerError):
    """Raised when some invalidations failed in continue-on-error mode."""

    def __init__(
        self,
        failures: list[tuple[str, Exception]],
        results: list[InvalidationResult],
    ) -> None:
        """Initialize an InvalidationDispatchError.

        :param failures: distribution ids with the error raised for them
        :param results: the invalidations successfully created
        """
        self.failures = failures
        self.results = results
        failed = ", ".join(distribution_id for distribution_id, _ in failures)
        super().__init__(
            f"{len(failures)} invalidation(s) failed: {failed}",
            origin="InvalidationDispatcher.dispatch",
        )


class InvalidationDispatcher:
    """Request the invalidation of object paths on a set of distributions."""

    def __init__(
        self,
        cloudfront: CloudFront,
        distribution_ids: str = WILDCARD,
        object_paths: str = DEFAULT_OBJECT_PATH,
        continue_on_error: bool = False,
        caller_reference: Optional[Callable[[], str]] = None,
    ) -> None:
        """Initialize an InvalidationDispatcher.

        :param cloudfront: the CloudFront abstraction used for all calls
        :param distribution_ids: comma-separated distribution ids, ``*`` or
            an empty string for all the distributions
        :param object_paths: comma-separated object paths, an empty string
            meaning ``/*``
        :param continue_on_error: if True, try all the distributions and
            raise an InvalidationDispatchError at the end if any failed.
            Otherwise the first error is propagated
        :param caller_reference: function returning a new unique caller
            reference on each call
        """
        self.cloudfront = cloudfront
        self.selector = DistributionSelector.from_string(distribution_ids)
        self.paths = parse_object_paths(object_paths)
        self.continue_on_error = continue_on_error
        self.caller_reference = (
            caller_reference
            if caller_reference is not None
            else default_caller_reference
        )

    def resolve_distributions(self) -> list[str]:
        """Return the ids of the distributions to invalidate.

        CloudFront is queried only when all the distributions are selected.
        Explicit ids are returned as is, without checking they exist.
        """
        if not self.selector.is_wildcard:
            return list(self.selector.ids)

        logger.info("listing all distributions")
        return [
            distribution["Id"]
            for distribution in self.cloudfront.list_distributions()
        ]

    def invalidate(self, distribution_id: str) -> InvalidationResult:
        """Create an invalidation on a single distribution.

        :param distribution_id: id of the distribution
        :return: the created invalidation
        """
        result = self.cloudfront.create_invalidation(
            distribution_id, self.paths, self.caller_reference()
        )
        logger.info(
            f"DistributionId:{distribution_id}, "
            f"InvalidationId:{result['InvalidationId']}, "
            f"ObjectPaths:{self.paths}"
        )
        return result

    def dispatch(self) -> DispatchResponse:
        """Create one invalidation per selected distribution.

        Requests are sent one at a time in the order the distributions were
        resolved. Nothing is rolled back on failure.

        :raise InvalidationDispatchError: in continue-on-error mode, if at
            least one invalidation failed
        :return: the processed distribution ids and created invalidations
        """
        distribution_ids = self.resolve_distributions()
        if not distribution_ids:
            logger.warning("no distribution to invalidate")

        results: list[InvalidationResult] = []
        failures: list[tuple[str, Exception]] = []
        for distribution_id in distribution_ids:
            try:
                results.append(self.invalidate(distribution_id))
            except Exception as e:
                if not self.continue_on_error:
                    raise
                logger.error(f"invalidation of {distribution_id} failed: {e}")
                failures.append((distribution_id, e))

        if failures:
            raise InvalidationDispatchError(failures=failures, results=results)

        return {
            "statusCode": DISPATCH_SUCCESS_STATUS,
            "body": distribution_ids,
            "invalidations": results,
        }
