from __future__ import annotations
from typing import TYPE_CHECKING
import logging
import os

import botocore.session
from botocore.stub import Stubber

from e3.error import E3Error

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from typing import Any, Dict, Optional
    import botocore.client
    import botocore.stub

CLOUDFRONT_REGION = "us-east-1"
"""Region serving the CloudFront API (CloudFront is a global service)."""


class CFSchedulerError(E3Error):
    """Base error of the invalidation scheduler."""


class Session:
    """Handle AWS session and clients."""

    def __init__(
        self,
        regions: Optional[list[str]] = None,
        stub: bool = False,
        profile: Optional[str] = None,
        credentials: Optional[Dict] = None,
    ) -> None:
        """Initialize an AWS session.

        :param regions: list of regions to work on. The first region is
            considered as the default region. If None, the region is read
            from AWS environment variables and defaults to us-east-1 where
            the CloudFront API lives
        :param stub: if True clients are necessarily stubbed
        :param profile: profile name
        :param credentials: AWS credentials dictionary containing the
            following keys: AccessKeyId, SecretAccessKey, SessionToken
            as returned by ``assume_role``
        """
        if profile is not None or credentials is None:
            self.session = botocore.session.Session(profile=profile)
        else:
            self.session = botocore.session.Session()
            self.session.set_credentials(
                access_key=credentials["AccessKeyId"],
                secret_key=credentials["SecretAccessKey"],
                token=credentials["SessionToken"],
            )

        self.profile = profile
        if regions is None:
            # the value return below is ('region', 'AWS_DEFAULT_REGION', None, None)
            # See botocore/configprovider.py
            region_variable = self.session.SESSION_VARIABLES["region"][1]
            region = os.environ.get(region_variable, "")
            self.regions = [region or CLOUDFRONT_REGION]
        else:
            self.regions = regions

        self.default_region = self.regions[0]

        self.force_stub = stub
        self.clients: dict[str, dict[str, botocore.client.BaseClient]] = {}
        self.stubbers: dict[str, dict[str, botocore.stub.Stubber]] = {}

    def assume_role(
        self,
        role_arn: str,
        role_session_name: str,
        session_duration: Optional[int] = None,
    ) -> Session:
        """Return a session with ``role_arn`` credentials.

        :param role_arn: ARN of the role to assume
        :param role_session_name: a name to associate with the created
            session
        :param session_duration: session duration in seconds or None for
            default
        :return: a Session instance
        """
        client = self.client("sts")
        arguments: Dict[str, Any] = {
            "RoleArn": role_arn,
            "RoleSessionName": role_session_name,
        }
        if session_duration is not None:
            arguments["DurationSeconds"] = session_duration

        logger.debug(f"assuming role {role_arn}")
        response = client.assume_role(**arguments)
        return Session(
            regions=self.regions,
            stub=self.force_stub,
            credentials=response["Credentials"],
        )

    def stub(
        self, name: str, region: Optional[str] = None
    ) -> Optional[botocore.stub.Stubber]:
        """Return stub for a given client.

        Note that if the client does not exist yet it will be created.

        :param name: client name
        :param region: region associated with the client. If None the default
            region is taken.
        :return: the stub instance, or None if the session is not stubbed
        """
        if not self.force_stub:
            return None
        if region is None:
            region = self.default_region

        if name not in self.stubbers or region not in self.stubbers[name]:
            # Create client
            self.client(name, region)

        return self.stubbers[name][region]

    def client(
        self, name: str, region: Optional[str] = None
    ) -> botocore.client.BaseClient:
        """Get a client.

        :param name: client name
        :param region: region associated with the client. If None the default
            region is taken.
        :return: a client instance
        """
        if region is None:
            region = self.default_region

        assert region is not None, "no region or default_region set"

        if name not in self.clients:
            self.clients[name] = {}
            self.stubbers[name] = {}

        if region not in self.clients[name]:
            self.clients[name][region] = self.session.create_client(
                name, region_name=region
            )
            if self.force_stub:
                self.stubbers[name][region] = Stubber(self.clients[name][region])
                self.stubbers[name][region].activate()

        return self.clients[name][region]
