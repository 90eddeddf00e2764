"""Resolves requested columns for CloudFront distributions.

The listing call is cheap, while GetDistribution and ListTagsForResource are
made per distribution. The resolver works out which of those calls the
requested columns need and makes each one at most once per distribution.
It then assembles a ResolvedRecord from whatever was fetched.
"""

import logging
import threading
from collections import deque
from collections.abc import Callable, Iterable, Iterator
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, replace

from cfinventory.arn import arn_to_akas
from cfinventory.aws.client import CloudFrontClient
from cfinventory.columns import COLUMN_NAMES, Column, lookup
from cfinventory.errors import CloudFrontInventoryError, NotFoundError
from cfinventory.models import (
    CONFIG_FIELDS,
    DistributionDetail,
    DistributionSummary,
    Hydrate,
    ResolvedRecord,
    TagSet,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Query:
    """Columns a caller wants, optionally narrowed to a single distribution."""

    columns: frozenset[str] = frozenset(COLUMN_NAMES)
    distribution_id: str | None = None


def merge_summary(listed: DistributionSummary, detailed: DistributionSummary) -> DistributionSummary:
    """Overlay the configuration fields of ``detailed`` onto ``listed``."""
    updates = {}
    for name in CONFIG_FIELDS:
        value = getattr(detailed, name)
        if value is not None:
            updates[name] = value
    return replace(listed, **updates)


def _hydrates(columns: list[Column]) -> frozenset[Hydrate]:
    return frozenset(c.hydrate for c in columns) - {Hydrate.NONE}


class ItemContext:
    """Fetch state for one distribution while its record is being built."""

    def __init__(
        self,
        client: CloudFrontClient,
        summary: DistributionSummary | None = None,
        detail: DistributionDetail | None = None,
        *,
        region: str | None = None,
        akas: Callable[[str], list[str] | None] = arn_to_akas,
    ):
        if summary is None and detail is None:
            raise ValueError("ItemContext needs a summary or a detail")
        self.region = region
        self.akas = akas
        self._client = client
        self._listed = summary
        self._detail = detail
        self._merged = None
        self._tags: TagSet | None = None
        self._detail_lock = threading.Lock()
        self._tags_lock = threading.Lock()

    @property
    def id(self) -> str:
        return self._listed.id if self._listed is not None else self._detail.id

    @property
    def summary(self) -> DistributionSummary:
        if self._detail is None:
            return self._listed
        if self._listed is None:
            return self._detail.summary
        if self._merged is None:
            self._merged = merge_summary(self._listed, self._detail.summary)
        return self._merged

    @property
    def hydrated(self) -> frozenset[Hydrate]:
        done = set()
        if self._detail is not None:
            done.add(Hydrate.DETAIL)
        if self._tags is not None:
            done.add(Hydrate.TAGS)
        return frozenset(done)

    def detail(self) -> DistributionDetail:
        with self._detail_lock:
            if self._detail is None:
                logger.debug("Fetching detail for distribution %s", self.id)
                self._detail = self._client.get_distribution(self.id)
            return self._detail

    def tag_set(self) -> TagSet:
        with self._tags_lock:
            if self._tags is None:
                logger.debug("Fetching tags for distribution %s", self.id)
                self._tags = self._client.list_tags(self.summary.arn)
            return self._tags


class Resolver:
    """Builds ResolvedRecords for listings and single-distribution lookups."""

    def __init__(
        self,
        client: CloudFrontClient,
        max_concurrent: int = 1,
        akas: Callable[[str], list[str] | None] = arn_to_akas,
    ):
        if max_concurrent < 1:
            raise ValueError("max_concurrent must be at least 1")
        self._client = client
        self._max_concurrent = max_concurrent
        self._akas = akas

    @staticmethod
    def plan(columns: Iterable[str]) -> frozenset[Hydrate]:
        """Upstream calls needed to serve ``columns``."""
        return _hydrates(lookup(columns))

    def execute(self, query: Query) -> Iterator[ResolvedRecord]:
        if query.distribution_id is not None:
            return iter(self.get(query.distribution_id, query.columns))
        return self.stream(query.columns)

    def stream(self, columns: Iterable[str]) -> Iterator[ResolvedRecord]:
        """Stream one record per distribution in listing order."""
        selected = lookup(columns)
        plan = _hydrates(selected)
        summaries = self._client.list_distributions()

        if self._max_concurrent == 1 or not plan:
            return (self._resolve(self._context(summary=s), selected, plan) for s in summaries)
        return self._resolve_concurrently(summaries, selected, plan)

    def get(self, distribution_id: str, columns: Iterable[str]) -> list[ResolvedRecord]:
        """Look up one distribution by id. Returns an empty list if it does not exist."""
        if not distribution_id:
            raise ValueError("distribution_id must not be empty")
        selected = lookup(columns)
        plan = _hydrates(selected)

        try:
            detail = self._client.get_distribution(distribution_id)
        except NotFoundError:
            logger.debug("Distribution %s not found", distribution_id)
            return []

        return [self._resolve(self._context(detail=detail), selected, plan)]

    def _context(self, **kwargs) -> ItemContext:
        return ItemContext(self._client, region=self._client.region, akas=self._akas, **kwargs)

    def _resolve(self, ctx: ItemContext, columns: list[Column], plan: frozenset[Hydrate]) -> ResolvedRecord:
        # Fetch before extracting so every column sees the same merged summary.
        if Hydrate.DETAIL in plan:
            ctx.detail()
        if Hydrate.TAGS in plan:
            ctx.tag_set()

        values = {column.name: column.extract(ctx) for column in columns}
        return ResolvedRecord(id=ctx.id, values=values, hydrated=ctx.hydrated)

    def _resolve_concurrently(
        self,
        summaries: Iterator[DistributionSummary],
        columns: list[Column],
        plan: frozenset[Hydrate],
    ) -> Iterator[ResolvedRecord]:
        executor = ThreadPoolExecutor(max_workers=self._max_concurrent)
        pending = deque()
        window = self._max_concurrent * 2
        summaries = iter(summaries)
        listing_error = None
        try:
            while True:
                # A failed page ends the listing but not the items already listed.
                try:
                    summary = next(summaries)
                except StopIteration:
                    break
                except CloudFrontInventoryError as exc:
                    listing_error = exc
                    break
                ctx = self._context(summary=summary)
                pending.append(executor.submit(self._resolve, ctx, columns, plan))
                if len(pending) >= window:
                    yield pending.popleft().result()
            while pending:
                yield pending.popleft().result()
            if listing_error is not None:
                raise listing_error
        finally:
            if pending:
                logger.debug("Cancelling %d pending distribution lookups", len(pending))
            for future in pending:
                future.cancel()
            executor.shutdown(wait=False, cancel_futures=True)
