from backoffice.domain.catalog.shard_index import (
    DEFAULT_OTHER_GROUP,
    ShardIdReader,
    ShardIndex,
    build_shard_index,
    merge_shard_ids,
    scan_shards,
)
from backoffice.domain.catalog.shards import ALL_SHARDS, CatalogShard, shard_for_group
from backoffice.domain.catalog.stock import LowStockReader, StockLevel, find_low_stock

__all__ = [
    "ALL_SHARDS",
    "CatalogShard",
    "DEFAULT_OTHER_GROUP",
    "LowStockReader",
    "ShardIdReader",
    "ShardIndex",
    "StockLevel",
    "build_shard_index",
    "find_low_stock",
    "merge_shard_ids",
    "scan_shards",
    "shard_for_group",
]
