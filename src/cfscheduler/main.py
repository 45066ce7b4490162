from __future__ import annotations
from typing import TYPE_CHECKING
import json
import logging
import os

from e3.main import Main

from cfscheduler import Session
from cfscheduler.config import DEFAULT_OBJECT_PATH, WILDCARD, InvalidatorConfig
from cfscheduler.dispatcher import InvalidationDispatchError
from cfscheduler.handler import create_dispatcher

if TYPE_CHECKING:
    from typing import Optional

logger = logging.getLogger("cfscheduler.main")


def main(args: Optional[list[str]] = None) -> int:
    """Invalidate CloudFront distributions from the command line.

    :param args: command line arguments, sys.argv if None
    :return: the exit status
    """
    m = Main(name="cfscheduler-invalidate")
    m.argument_parser.add_argument(
        "--distribution-ids",
        default=os.environ.get("DISTRIBUTION_IDS", WILDCARD),
        help="distribution ids separated by commas, * for all "
        "(default: $DISTRIBUTION_IDS or *)",
    )
    m.argument_parser.add_argument(
        "--object-paths",
        default=os.environ.get("OBJECT_PATHS", DEFAULT_OBJECT_PATH),
        help="paths to invalidate separated by commas, e.g. /images/*,/css/* "
        "(default: $OBJECT_PATHS or /*)",
    )
    m.argument_parser.add_argument("--profile", help="choose AWS profile")
    m.argument_parser.add_argument(
        "--region",
        help="region of the CloudFront client "
        "(default: $AWS_DEFAULT_REGION or us-east-1)",
    )
    m.argument_parser.add_argument(
        "--assume-role", metavar="ROLE_ARN", help="role to assume before invalidating"
    )
    m.argument_parser.add_argument(
        "--continue-on-error",
        action="store_true",
        help="try all distributions even if an invalidation fails",
    )
    m.argument_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="resolve the distributions, do not invalidate, log only",
    )
    m.argument_parser.add_argument(
        "--json", action="store_true", help="output the result as JSON"
    )
    m.parse_args(args)
    assert m.args is not None

    session = Session(
        regions=None if m.args.region is None else [m.args.region],
        profile=m.args.profile,
    )
    if m.args.assume_role is not None:
        session = session.assume_role(m.args.assume_role, "cfscheduler-invalidate")

    config = InvalidatorConfig(
        distribution_ids=m.args.distribution_ids,
        object_paths=m.args.object_paths,
        continue_on_error=m.args.continue_on_error,
    )
    dispatcher = create_dispatcher(config, session=session)

    if m.args.dry_run:
        distribution_ids = dispatcher.resolve_distributions()
        for distribution_id in distribution_ids:
            logger.info(
                f"would invalidate {dispatcher.paths} on {distribution_id} (dry run)"
            )
        if m.args.json:
            print(json.dumps({"body": distribution_ids, "paths": dispatcher.paths}))
        return 0

    try:
        response = dispatcher.dispatch()
    except InvalidationDispatchError as e:
        logger.error(str(e))
        if m.args.json:
            print(
                json.dumps(
                    {
                        "invalidations": e.results,
                        "failures": {
                            distribution_id: str(error)
                            for distribution_id, error in e.failures
                        },
                    }
                )
            )
        return 1

    if m.args.json:
        print(json.dumps(response))
    else:
        for result in response["invalidations"]:
            print(f"{result['DistributionId']} {result['InvalidationId']}")
    return 0
