"""Provide helpers for interacting with CloudFront distributions."""

from __future__ import annotations

import logging
import time
from uuid import uuid4

from typing import TYPE_CHECKING, TypedDict

if TYPE_CHECKING:
    import botocore.client

    from typing import Any

logger = logging.getLogger("cfscheduler.cloudfront")


class Distribution(TypedDict):
    """Represent a distribution as returned by the enumeration."""

    Id: str
    """Distribution identifier (e.g. ``E2QWRUHAPOMQZL``)."""
    DomainName: str
    """CloudFront domain name (e.g. ``d111111abcdef8.cloudfront.net``)."""
    Aliases: list[str]
    """Alternate domain names (CNAMEs) of the distribution."""


class InvalidationResult(TypedDict):
    """Represent an invalidation created on a distribution."""

    DistributionId: str
    InvalidationId: str
    """Identifier assigned to the invalidation by CloudFront."""
    Status: str
    """Status of the invalidation, ``InProgress`` once created."""


def caller_reference() -> str:
    """Return a unique caller reference for an invalidation batch.

    CloudFront ignores a batch whose caller reference was already used for
    the same distribution, so the reference combines a nanosecond timestamp
    with a random suffix.
    """
    return f"{time.time_ns()}-{uuid4().hex}"


class CloudFront:
    """CloudFront abstraction."""

    def __init__(self, client: botocore.client.BaseClient) -> None:
        """Initialize CloudFront.

        :param client: a client for the CloudFront API
        """
        self.client = client

    def list_distributions(self) -> list[Distribution]:
        """Return all the distributions visible to the client credentials.

        :return: the distributions in the order returned by CloudFront
        """
        result: list[Distribution] = []
        paginator = self.client.get_paginator("list_distributions")
        for page in paginator.paginate():
            distribution_list = page["DistributionList"]
            if distribution_list["Quantity"] == 0:
                continue
            for summary in distribution_list["Items"]:
                result.append(
                    {
                        "Id": summary["Id"],
                        "DomainName": summary["DomainName"],
                        "Aliases": summary.get("Aliases", {}).get("Items", []),
                    }
                )

        logger.debug(f"found {len(result)} distribution(s)")
        return result

    def create_invalidation(
        self, distribution_id: str, paths: list[str], caller_reference: str
    ) -> InvalidationResult:
        """Request the invalidation of paths on a distribution.

        Errors (unknown distribution, access denied, malformed path,
        throttling, etc.) are reported by botocore as ``ClientError`` and
        are **not** caught.

        :param distribution_id: id of the distribution
        :param paths: path patterns to invalidate, ``*`` being allowed only
            as last character
        :param caller_reference: a value unique to this request
        :return: the created invalidation
        """
        params: dict[str, Any] = {
            "DistributionId": distribution_id,
            "InvalidationBatch": {
                "Paths": {"Quantity": len(paths), "Items": paths},
                "CallerReference": caller_reference,
            },
        }
        response = self.client.create_invalidation(**params)
        logger.debug(f"create_invalidation response: {response}")

        invalidation = response["Invalidation"]
        return {
            "DistributionId": distribution_id,
            "InvalidationId": invalidation["Id"],
            "Status": invalidation["Status"],
        }
