"""Core data models for CloudFront distribution inventory."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from typing import Any

from cfinventory.errors import MalformedUpstreamError


class Hydrate(StrEnum):
    """Upstream call a column depends on."""

    NONE = "none"
    DETAIL = "detail"
    TAGS = "tags"


class SourceKind(StrEnum):
    """Where a column's value is sourced from."""

    SUMMARY = "summary"
    DETAIL = "detail"
    TAGS = "tags"
    DERIVED = "derived"


# Summary fields that GetDistribution resupplies through DistributionConfig.
# On merge these take the detail value.
CONFIG_FIELDS = (
    "enabled",
    "comment",
    "price_class",
    "http_version",
    "is_ipv6_enabled",
    "origins",
    "origin_groups",
    "aliases",
    "cache_behaviors",
    "default_cache_behavior",
    "custom_error_responses",
    "restrictions",
    "viewer_certificate",
    "web_acl_id",
)


def _require(item: dict, key: str) -> Any:
    value = item.get(key)
    if value is None:
        raise MalformedUpstreamError(f"Distribution entry is missing {key!r}")
    return value


@dataclass(frozen=True)
class DistributionSummary:
    """Listing-call view of a distribution."""

    id: str
    arn: str
    enabled: bool | None = None
    status: str | None = None
    domain_name: str | None = None
    last_modified_time: datetime | None = None
    comment: str | None = None
    price_class: str | None = None
    http_version: str | None = None
    is_ipv6_enabled: bool | None = None
    origins: dict | None = None
    origin_groups: dict | None = None
    aliases: dict | None = None
    cache_behaviors: dict | None = None
    default_cache_behavior: dict | None = None
    custom_error_responses: dict | None = None
    restrictions: dict | None = None
    viewer_certificate: dict | None = None
    web_acl_id: str | None = None
    alias_icp_recordals: list[dict] | None = None

    @classmethod
    def from_api(cls, item: dict) -> "DistributionSummary":
        """Build a summary from a ListDistributions ``DistributionSummary`` item."""
        return cls(
            id=_require(item, "Id"),
            arn=_require(item, "ARN"),
            enabled=item.get("Enabled"),
            status=item.get("Status"),
            domain_name=item.get("DomainName"),
            last_modified_time=item.get("LastModifiedTime"),
            comment=item.get("Comment"),
            price_class=item.get("PriceClass"),
            http_version=item.get("HttpVersion"),
            is_ipv6_enabled=item.get("IsIPV6Enabled"),
            origins=item.get("Origins"),
            origin_groups=item.get("OriginGroups"),
            aliases=item.get("Aliases"),
            cache_behaviors=item.get("CacheBehaviors"),
            default_cache_behavior=item.get("DefaultCacheBehavior"),
            custom_error_responses=item.get("CustomErrorResponses"),
            restrictions=item.get("Restrictions"),
            viewer_certificate=item.get("ViewerCertificate"),
            web_acl_id=item.get("WebACLId"),
            alias_icp_recordals=item.get("AliasICPRecordals"),
        )

    @classmethod
    def from_distribution(cls, dist: dict) -> "DistributionSummary":
        """Synthesize a summary from a GetDistribution ``Distribution`` body.

        Top-level fields are read from the distribution itself, everything
        else from its ``DistributionConfig``.
        """
        config = dist.get("DistributionConfig") or {}
        return cls(
            id=_require(dist, "Id"),
            arn=_require(dist, "ARN"),
            enabled=config.get("Enabled"),
            status=dist.get("Status"),
            domain_name=dist.get("DomainName"),
            last_modified_time=dist.get("LastModifiedTime"),
            comment=config.get("Comment"),
            price_class=config.get("PriceClass"),
            http_version=config.get("HttpVersion"),
            is_ipv6_enabled=config.get("IsIPV6Enabled"),
            origins=config.get("Origins"),
            origin_groups=config.get("OriginGroups"),
            aliases=config.get("Aliases"),
            cache_behaviors=config.get("CacheBehaviors"),
            default_cache_behavior=config.get("DefaultCacheBehavior"),
            custom_error_responses=config.get("CustomErrorResponses"),
            restrictions=config.get("Restrictions"),
            viewer_certificate=config.get("ViewerCertificate"),
            web_acl_id=config.get("WebACLId"),
            alias_icp_recordals=dist.get("AliasICPRecordals"),
        )


@dataclass(frozen=True)
class DistributionDetail:
    """Full view of a distribution as returned by GetDistribution."""

    summary: DistributionSummary
    distribution_config: dict
    active_trusted_key_groups: dict | None = None
    active_trusted_signers: dict | None = None
    in_progress_invalidation_batches: int | None = None
    etag: str | None = None

    @property
    def id(self) -> str:
        return self.summary.id

    @property
    def arn(self) -> str:
        return self.summary.arn

    @classmethod
    def from_api(cls, response: dict) -> "DistributionDetail":
        dist = response.get("Distribution")
        if not dist:
            raise MalformedUpstreamError("GetDistribution response has no Distribution")
        return cls(
            summary=DistributionSummary.from_distribution(dist),
            distribution_config=dist.get("DistributionConfig") or {},
            active_trusted_key_groups=dist.get("ActiveTrustedKeyGroups"),
            active_trusted_signers=dist.get("ActiveTrustedSigners"),
            in_progress_invalidation_batches=dist.get("InProgressInvalidationBatches"),
            etag=response.get("ETag"),
        )


@dataclass(frozen=True)
class TagSet:
    """Ordered tag pairs attached to a distribution ARN."""

    pairs: tuple[tuple[str, str], ...] = ()

    @property
    def mapping(self) -> dict[str, str]:
        """Tags as a dict. A repeated key keeps its last value."""
        return {key: value for key, value in self.pairs}

    def as_list(self) -> list[dict[str, str]]:
        return [{"Key": key, "Value": value} for key, value in self.pairs]

    def __len__(self) -> int:
        return len(self.pairs)


@dataclass(frozen=True)
class ResolvedRecord:
    """One output row: the requested column values for a distribution."""

    id: str
    values: dict[str, Any]
    hydrated: frozenset[Hydrate] = field(default_factory=frozenset)

    def __getitem__(self, column: str) -> Any:
        return self.values[column]

    def __contains__(self, column: object) -> bool:
        return column in self.values

    def get(self, column: str, default: Any = None) -> Any:
        return self.values.get(column, default)
