from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .aws import ddb
from .settings import S

@dataclass(frozen=True)
class Tables:
    addresses: Any
    address_defaults: Any
    orders: Any
    feelings: Any

T = Tables(
    addresses=ddb.Table(S.addresses_table_name),
    address_defaults=ddb.Table(S.address_defaults_table_name),
    orders=ddb.Table(S.orders_table_name),
    feelings=ddb.Table(S.feelings_table_name),
)
