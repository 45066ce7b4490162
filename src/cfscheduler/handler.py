"""Entry point of the scheduled invalidation function."""

from __future__ import annotations
from typing import TYPE_CHECKING
import logging

from cfscheduler import Session
from cfscheduler.cloudfront import CloudFront
from cfscheduler.config import InvalidatorConfig
from cfscheduler.dispatcher import InvalidationDispatcher

if TYPE_CHECKING:
    from typing import Any, Optional
    from cfscheduler.dispatcher import DispatchResponse

logger = logging.getLogger("cfscheduler.handler")


def create_dispatcher(
    config: InvalidatorConfig, session: Optional[Session] = None
) -> InvalidationDispatcher:
    """Create a dispatcher from a configuration.

    :param config: the invalidation configuration
    :param session: the AWS session, if None a new one is created for the
        configured region
    :return: the dispatcher
    """
    if session is None:
        session = Session(regions=None if config.region is None else [config.region])

    return InvalidationDispatcher(
        CloudFront(session.client("cloudfront")),
        distribution_ids=config.distribution_ids,
        object_paths=config.object_paths,
        continue_on_error=config.continue_on_error,
    )


def lambda_handler(event: Any, context: Any) -> DispatchResponse:
    """Invalidate the configured distributions.

    The event sent by the scheduler carries no information and is ignored.
    """
    del event, context
    config = InvalidatorConfig.from_env()
    logging.getLogger("cfscheduler").setLevel(config.log_level)

    logger.info(
        f"invalidating {config.object_paths!r} "
        f"on distributions {config.distribution_ids!r}"
    )
    return create_dispatcher(config).dispatch()
