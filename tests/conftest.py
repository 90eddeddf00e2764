"""Shared test fixtures."""

from datetime import UTC, datetime
from unittest.mock import MagicMock

import boto3
import pytest
from moto import mock_aws

from cfinventory.errors import NotFoundError
from cfinventory.models import DistributionDetail, DistributionSummary, TagSet

ACCOUNT_ID = "123456789012"


def arn_for(distribution_id):
    return f"arn:aws:cloudfront::{ACCOUNT_ID}:distribution/{distribution_id}"


@pytest.fixture
def aws_credentials(monkeypatch):
    """Set dummy AWS credentials for moto."""
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_SECURITY_TOKEN", "testing")
    monkeypatch.setenv("AWS_SESSION_TOKEN", "testing")
    monkeypatch.setenv("AWS_DEFAULT_REGION", "us-east-1")


@pytest.fixture
def cloudfront(aws_credentials):
    """Create a moto-mocked CloudFront boto3 client."""
    with mock_aws():
        yield boto3.client("cloudfront", region_name="us-east-1")


@pytest.fixture
def distribution_config():
    """Build a minimal DistributionConfig accepted by CreateDistribution."""

    def _build(ref, comment="test distribution", enabled=False):
        return {
            "CallerReference": ref,
            "Origins": {
                "Quantity": 1,
                "Items": [
                    {
                        "Id": "origin1",
                        "DomainName": "my-bucket.s3.us-east-1.amazonaws.com",
                        "S3OriginConfig": {"OriginAccessIdentity": ""},
                    }
                ],
            },
            "DefaultCacheBehavior": {
                "TargetOriginId": "origin1",
                "ViewerProtocolPolicy": "allow-all",
            },
            "Comment": comment,
            "Enabled": enabled,
        }

    return _build


@pytest.fixture
def summary_item():
    """Build a ListDistributions DistributionSummary item."""

    def _build(distribution_id, **overrides):
        item = {
            "Id": distribution_id,
            "ARN": arn_for(distribution_id),
            "Status": "Deployed",
            "LastModifiedTime": datetime(2026, 2, 25, 13, 0, 0, tzinfo=UTC),
            "DomainName": f"{distribution_id.lower()}.cloudfront.net",
            "Aliases": {"Quantity": 0},
            "Origins": {"Quantity": 1, "Items": [{"Id": "origin1", "DomainName": "example.com"}]},
            "DefaultCacheBehavior": {"TargetOriginId": "origin1", "ViewerProtocolPolicy": "allow-all"},
            "CacheBehaviors": {"Quantity": 0},
            "CustomErrorResponses": {"Quantity": 0},
            "Comment": "listed comment",
            "PriceClass": "PriceClass_All",
            "Enabled": True,
            "ViewerCertificate": {"CloudFrontDefaultCertificate": True},
            "Restrictions": {"GeoRestriction": {"RestrictionType": "none", "Quantity": 0}},
            "WebACLId": "",
            "HttpVersion": "http2",
            "IsIPV6Enabled": True,
            "AliasICPRecordals": [],
        }
        item.update(overrides)
        return item

    return _build


@pytest.fixture
def get_response():
    """Build a GetDistribution response body."""

    def _build(distribution_id, etag="E2QWRUHEXAMPLE", **config_overrides):
        config = {
            "CallerReference": f"ref-{distribution_id}",
            "Aliases": {"Quantity": 1, "Items": ["cdn.example.com"]},
            "DefaultRootObject": "index.html",
            "Origins": {"Quantity": 1, "Items": [{"Id": "origin1", "DomainName": "example.com"}]},
            "DefaultCacheBehavior": {"TargetOriginId": "origin1", "ViewerProtocolPolicy": "https-only"},
            "CacheBehaviors": {"Quantity": 0},
            "Comment": "detail comment",
            "PriceClass": "PriceClass_100",
            "Enabled": True,
            "HttpVersion": "http2and3",
            "IsIPV6Enabled": False,
        }
        config.update(config_overrides)
        return {
            "ETag": etag,
            "Distribution": {
                "Id": distribution_id,
                "ARN": arn_for(distribution_id),
                "Status": "InProgress",
                "LastModifiedTime": datetime(2026, 3, 1, 9, 0, 0, tzinfo=UTC),
                "InProgressInvalidationBatches": 2,
                "DomainName": f"{distribution_id.lower()}.cloudfront.net",
                "ActiveTrustedSigners": {"Enabled": False, "Quantity": 0},
                "ActiveTrustedKeyGroups": {"Enabled": False, "Quantity": 0},
                "DistributionConfig": config,
                "AliasICPRecordals": [],
            },
        }

    return _build


@pytest.fixture
def fake_client(summary_item, get_response):
    """A stand-in CloudFrontClient whose calls can be counted.

    ``fake_client.summaries`` seeds the listing, ``fake_client.tags`` maps an
    ARN to its tag pairs. Unknown ids raise NotFoundError from get_distribution.
    """
    client = MagicMock()
    client.region = "us-east-1"
    client.summaries = []
    client.tags = {}

    client.list_distributions.side_effect = lambda: iter(client.summaries)

    def _get(distribution_id):
        if distribution_id not in {s.id for s in client.summaries}:
            raise NotFoundError(distribution_id)
        return DistributionDetail.from_api(get_response(distribution_id))

    def _tags(arn):
        return TagSet(pairs=tuple(client.tags.get(arn, ())))

    client.get_distribution.side_effect = _get
    client.list_tags.side_effect = _tags

    def _seed(*distribution_ids, **overrides):
        client.summaries = [
            DistributionSummary.from_api(summary_item(i, **overrides)) for i in distribution_ids
        ]

    client.seed = _seed
    return client
