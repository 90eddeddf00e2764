"""Static routing table from column name to data source and extractor."""

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from cfinventory.arn import parse_arn
from cfinventory.models import Hydrate, SourceKind
from cfinventory.tags import normalize_tags

if TYPE_CHECKING:
    from cfinventory.resolver import ItemContext


@dataclass(frozen=True)
class Column:
    """One output attribute.

    ``hydrate`` names the upstream call the extractor needs. Derived columns
    transform a value taken from that source instead of copying it.
    """

    name: str
    hydrate: Hydrate
    extract: Callable[["ItemContext"], Any]
    description: str = ""
    derived: bool = False

    @property
    def kind(self) -> SourceKind:
        if self.derived:
            return SourceKind.DERIVED
        if self.hydrate == Hydrate.DETAIL:
            return SourceKind.DETAIL
        if self.hydrate == Hydrate.TAGS:
            return SourceKind.TAGS
        return SourceKind.SUMMARY


def _summary(field_name: str, description: str) -> Column:
    return Column(
        name=field_name,
        hydrate=Hydrate.NONE,
        extract=lambda ctx: getattr(ctx.summary, field_name),
        description=description,
    )


def _arn_part(part: str) -> Callable[["ItemContext"], str]:
    return lambda ctx: parse_arn(ctx.summary.arn)[part]


COLUMNS: tuple[Column, ...] = (
    _summary("id", "The identifier for the distribution."),
    _summary("enabled", "Whether the distribution accepts user requests for content."),
    Column(
        "e_tag",
        Hydrate.DETAIL,
        lambda ctx: ctx.detail().etag,
        "The current version of the distribution's information.",
    ),
    _summary("status", "The current status of the distribution, e.g. Deployed."),
    _summary("last_modified_time", "The date and time the distribution was last modified."),
    _summary("domain_name", "The CloudFront domain name, e.g. d111111abcdef8.cloudfront.net."),
    Column(
        "tags_src",
        Hydrate.TAGS,
        lambda ctx: ctx.tag_set().as_list(),
        "The tags attached to the distribution, as returned by CloudFront.",
    ),
    _summary("comment", "The comment specified when the distribution was created."),
    _summary("http_version", "The maximum HTTP version viewers may use."),
    _summary("is_ipv6_enabled", "Whether CloudFront answers IPv6 DNS requests."),
    _summary("alias_icp_recordals", "ICP recordal status for CNAMEs served in China."),
    _summary("custom_error_responses", "Custom error response rules."),
    _summary("default_cache_behavior", "The cache behavior used when no path pattern matches."),
    _summary("origin_groups", "Origin groups configured for the distribution."),
    _summary("restrictions", "Geo restrictions on content distribution."),
    _summary("viewer_certificate", "SSL/TLS configuration for viewer connections."),
    Column(
        "active_trusted_key_groups",
        Hydrate.DETAIL,
        lambda ctx: ctx.detail().active_trusted_key_groups,
        "Key groups CloudFront can use to verify signed URLs and cookies.",
    ),
    Column(
        "active_trusted_signers",
        Hydrate.DETAIL,
        lambda ctx: ctx.detail().active_trusted_signers,
        "Accounts whose key pairs CloudFront can use to verify signed URLs and cookies.",
    ),
    _summary("price_class", "The price class of the distribution."),
    _summary("web_acl_id", "The web ACL associated with the distribution, if any."),
    Column(
        "default_root_object",
        Hydrate.DETAIL,
        lambda ctx: ctx.detail().distribution_config.get("DefaultRootObject"),
        "The object returned for requests to the root URL.",
    ),
    _summary("aliases", "Alternate domain names (CNAMEs) for the distribution."),
    _summary("cache_behaviors", "Path-pattern cache behaviors."),
    _summary("origins", "Origins the distribution fetches content from."),
    Column(
        "in_progress_invalidation_batches",
        Hydrate.DETAIL,
        lambda ctx: ctx.detail().in_progress_invalidation_batches,
        "The number of invalidation batches currently in progress.",
    ),
    Column(
        "tags",
        Hydrate.TAGS,
        lambda ctx: normalize_tags(ctx.tag_set()),
        "Tags as a map of key to value.",
        derived=True,
    ),
    Column(
        "akas",
        Hydrate.NONE,
        lambda ctx: ctx.akas(ctx.summary.arn),
        "Alternate identifiers for the distribution.",
        derived=True,
    ),
    _summary("arn", "The ARN of the distribution."),
    Column(
        "partition",
        Hydrate.NONE,
        _arn_part("partition"),
        "The AWS partition, e.g. aws or aws-cn.",
        derived=True,
    ),
    Column(
        "region",
        Hydrate.NONE,
        lambda ctx: ctx.region,
        "The region the distribution was queried through.",
        derived=True,
    ),
    Column(
        "account_id",
        Hydrate.NONE,
        _arn_part("account_id"),
        "The AWS account that owns the distribution.",
        derived=True,
    ),
)

COLUMNS_BY_NAME: dict[str, Column] = {c.name: c for c in COLUMNS}
COLUMN_NAMES: tuple[str, ...] = tuple(COLUMNS_BY_NAME)


def lookup(names) -> list[Column]:
    """Resolve column names in table order. Unknown names raise ValueError."""
    wanted = set(names)
    unknown = wanted - COLUMNS_BY_NAME.keys()
    if unknown:
        raise ValueError(f"Unknown column(s): {', '.join(sorted(unknown))}")
    return [c for c in COLUMNS if c.name in wanted]
