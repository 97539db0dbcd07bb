from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Protocol, Sequence

from backoffice.domain.catalog.shard_index import scan_shards
from backoffice.domain.catalog.shards import ALL_SHARDS, CatalogShard


@dataclass(frozen=True)
class StockLevel:
    product_id: str
    name: str
    quantity: int
    group: str = ""


class LowStockReader(Protocol):
    def read_low_stock(self, shard: CatalogShard, threshold: int) -> Sequence[StockLevel]:
        ...


def find_low_stock(
    reader: LowStockReader,
    threshold: int,
    shards: Iterable[CatalogShard] = ALL_SHARDS,
    max_workers: int = 8,
) -> list[StockLevel]:
    if threshold < 0:
        raise ValueError("threshold must be non-negative")

    by_shard = scan_shards(
        lambda shard: reader.read_low_stock(shard, threshold),
        shards,
        max_workers=max_workers,
        purpose="low stock",
    )
    rows: list[StockLevel] = []
    for shard, levels in by_shard.items():
        for level in levels:
            if level.quantity >= threshold:
                continue
            rows.append(
                StockLevel(
                    product_id=level.product_id,
                    name=level.name,
                    quantity=level.quantity,
                    group=shard.group,
                )
            )
    return sorted(rows, key=lambda row: row.quantity)
