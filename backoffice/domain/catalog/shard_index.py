from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from types import MappingProxyType
from typing import Callable, Iterable, Mapping, Protocol, Sequence, TypeVar

from backoffice.domain.catalog.shards import ALL_SHARDS, CatalogShard

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_OTHER_GROUP = "Other"


class ShardIdReader(Protocol):
    def read_ids(self, shard: CatalogShard) -> Sequence[str]:
        ...


def scan_shards(
    read: Callable[[CatalogShard], Sequence[T]],
    shards: Iterable[CatalogShard] = ALL_SHARDS,
    max_workers: int = 8,
    purpose: str = "catalog scan",
) -> dict[CatalogShard, list[T]]:
    """Run ``read`` against every shard concurrently.

    A shard whose read raises is logged and reported as empty. The returned
    dict preserves the order of ``shards``.
    """
    shard_list = list(shards)
    if not shard_list:
        return {}

    def _safe_read(shard: CatalogShard) -> list[T]:
        try:
            return list(read(shard))
        except Exception as exc:
            logger.warning(
                "could not read catalog shard %s (%s) for %s, treating as empty: %s",
                shard.group,
                shard.table_name,
                purpose,
                exc,
            )
            return []

    workers = min(max_workers, len(shard_list))
    with ThreadPoolExecutor(max_workers=workers) as pool:
        results = list(pool.map(_safe_read, shard_list))
    return dict(zip(shard_list, results))


@dataclass(frozen=True)
class ShardIndex:
    groups: Mapping[str, str]
    other_group: str = DEFAULT_OTHER_GROUP

    def group_for(self, product_id: str | None) -> str:
        if not product_id:
            return self.other_group
        return self.groups.get(product_id, self.other_group)

    def __len__(self) -> int:
        return len(self.groups)


def merge_shard_ids(
    ids_by_shard: Mapping[CatalogShard, Sequence[str]],
    other_group: str = DEFAULT_OTHER_GROUP,
) -> ShardIndex:
    groups: dict[str, str] = {}
    for shard, product_ids in ids_by_shard.items():
        for product_id in product_ids:
            existing = groups.get(product_id)
            if existing is None:
                groups[product_id] = shard.group
            elif existing != shard.group:
                logger.warning(
                    "product %s found in shards %s and %s; keeping %s",
                    product_id,
                    existing,
                    shard.group,
                    existing,
                )
    return ShardIndex(groups=MappingProxyType(groups), other_group=other_group)


def build_shard_index(
    reader: ShardIdReader,
    shards: Iterable[CatalogShard] = ALL_SHARDS,
    max_workers: int = 8,
    other_group: str = DEFAULT_OTHER_GROUP,
) -> ShardIndex:
    ids_by_shard = scan_shards(reader.read_ids, shards, max_workers=max_workers, purpose="shard index")
    index = merge_shard_ids(ids_by_shard, other_group=other_group)
    logger.debug("shard index built: products=%s shards=%s", len(index), len(ids_by_shard))
    return index
