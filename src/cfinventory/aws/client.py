"""Thin boto3 wrapper for the CloudFront calls behind distribution columns."""

import logging
from collections.abc import Iterator

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from cfinventory.config import Settings
from cfinventory.errors import NotFoundError, TransportError
from cfinventory.models import DistributionDetail, DistributionSummary, TagSet
from cfinventory.tags import parse_tag_list

logger = logging.getLogger(__name__)

NOT_FOUND_CODES = {"NoSuchDistribution"}


def boto_config(settings: Settings) -> Config:
    """Retry and timeout policy handed to botocore."""
    return Config(
        retries={"max_attempts": settings.max_attempts, "mode": "standard"},
        read_timeout=settings.read_timeout,
        connect_timeout=settings.connect_timeout,
        user_agent_extra="cfinventory",
    )


def open_session(region: str | None = None, profile: str | None = None) -> boto3.Session:
    """Create the boto3 session shared by every call of one operation."""
    kwargs = {}
    if region:
        kwargs["region_name"] = region
    if profile:
        kwargs["profile_name"] = profile
    try:
        return boto3.Session(**kwargs)
    except BotoCoreError as exc:
        raise TransportError("OpenSession", str(exc)) from exc


def _transport_error(operation: str, exc: Exception) -> TransportError:
    if isinstance(exc, ClientError):
        error = exc.response.get("Error", {})
        return TransportError(operation, error.get("Message") or str(exc), code=error.get("Code"))
    return TransportError(operation, str(exc))


class CloudFrontClient:
    """Wraps boto3 CloudFront calls and returns cfinventory dataclasses."""

    def __init__(
        self,
        region: str | None = None,
        session: boto3.Session | None = None,
        config: Config | None = None,
    ):
        session = session or open_session(region)
        self.region = region or session.region_name
        self._client = session.client(
            "cloudfront",
            **({"region_name": region} if region else {}),
            **({"config": config} if config else {}),
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "CloudFrontClient":
        session = open_session(settings.region, settings.profile)
        return cls(region=settings.region, session=session, config=boto_config(settings))

    def list_distributions(self) -> Iterator[DistributionSummary]:
        """Yield one summary per distribution, in the order CloudFront lists them."""
        paginator = self._client.get_paginator("list_distributions")
        seen: set[str] = set()
        try:
            for page in paginator.paginate():
                dist_list = page.get("DistributionList") or {}
                for item in dist_list.get("Items") or []:
                    summary = DistributionSummary.from_api(item)
                    if summary.id in seen:
                        logger.warning("Skipping duplicate distribution %s in listing", summary.id)
                        continue
                    seen.add(summary.id)
                    yield summary
        except (ClientError, BotoCoreError) as exc:
            raise _transport_error("ListDistributions", exc) from exc

    def get_distribution(self, distribution_id: str) -> DistributionDetail:
        """Fetch the full configuration of one distribution."""
        try:
            response = self._client.get_distribution(Id=distribution_id)
        except ClientError as exc:
            if exc.response.get("Error", {}).get("Code") in NOT_FOUND_CODES:
                raise NotFoundError(distribution_id) from exc
            raise _transport_error("GetDistribution", exc) from exc
        except BotoCoreError as exc:
            raise _transport_error("GetDistribution", exc) from exc

        return DistributionDetail.from_api(response)

    def list_tags(self, arn: str) -> TagSet:
        """Fetch the tags attached to a distribution ARN."""
        try:
            response = self._client.list_tags_for_resource(Resource=arn)
        except (ClientError, BotoCoreError) as exc:
            raise _transport_error("ListTagsForResource", exc) from exc

        return parse_tag_list((response.get("Tags") or {}).get("Items"))
