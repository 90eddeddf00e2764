"""Helpers for CloudFront ARNs."""

from cfinventory.errors import MalformedUpstreamError


def parse_arn(arn: str) -> dict[str, str]:
    """Split an ARN into partition, service, region, account_id and resource."""
    parts = arn.split(":", 5)
    if len(parts) != 6 or parts[0] != "arn":
        raise MalformedUpstreamError(f"Not an ARN: {arn!r}")
    _, partition, service, region, account_id, resource = parts
    return {
        "partition": partition,
        "service": service,
        "region": region,
        "account_id": account_id,
        "resource": resource,
    }


def arn_to_akas(arn: str | None) -> list[str] | None:
    """Alternate identifiers for a resource. CloudFront only has its ARN."""
    if arn is None:
        return None
    return [arn]
