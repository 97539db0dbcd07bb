from __future__ import annotations

from enum import Enum


class CatalogShard(Enum):
    """Product catalog partitions, one physical table per group label.

    Enumeration order is significant: when a product id turns up in more than
    one shard, the earliest member wins.
    """

    BDR = ("BDR", "products_bdr")
    LA = ("LA", "products_la")
    AG = ("АГ", "products_ag")
    AB_CYR = ("АБ", "products_ab_cyr")
    AR_CYR = ("АР", "products_ar_cyr")
    BEZ_SOKR = ("без сокращений", "products_bez_sokr")
    AF = ("АФ", "products_af")
    DS = ("ДС", "products_ds")
    M8 = ("м8", "products_m8")
    JDA = ("JDA", "products_jda")
    FAITH = ("Faith", "products_faith")
    AB_LAT = ("AB", "products_ab_lat")
    GF = ("ГФ", "products_gf")
    ES = ("ЕС", "products_es")
    GP = ("ГП", "products_gp")
    SD = ("СД", "products_sd")
    ATA = ("ATA", "products_ata")
    W = ("W", "products_w")
    GUASHA = ("Гуаша", "products_guasha")

    def __init__(self, group: str, table_name: str):
        self.group = group
        self.table_name = table_name


ALL_SHARDS: tuple[CatalogShard, ...] = tuple(CatalogShard)


def shard_for_group(group: str) -> CatalogShard:
    for shard in CatalogShard:
        if shard.group == group:
            return shard
    raise KeyError(f"unknown catalog group: {group}")
