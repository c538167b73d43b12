from __future__ import annotations

import os
from dataclasses import dataclass

@dataclass(frozen=True)
class Settings:
    # AWS
    aws_region: str = os.environ.get("AWS_REGION", "us-east-1")
    ddb_endpoint_url: str = os.environ.get("DDB_ENDPOINT_URL", "")  # e.g. http://localhost:8000 for dynamodb-local

    # DynamoDB tables
    addresses_table_name: str = os.environ.get("ADDRESSES_TABLE_NAME", "addresses")
    address_defaults_table_name: str = os.environ.get("ADDRESS_DEFAULTS_TABLE_NAME", "address_defaults")
    orders_table_name: str = os.environ.get("ORDERS_TABLE_NAME", "orders")
    feelings_table_name: str = os.environ.get("FEELINGS_TABLE_NAME", "feelings")
    feelings_type_index: str = os.environ.get("FEELINGS_TYPE_INDEX", "feeling_type-index")

    # Auth (token issuing lives elsewhere; we only verify)
    jwt_secret: str = os.environ.get("JWT_SECRET", "")
    jwt_algorithm: str = os.environ.get("JWT_ALGORITHM", "HS256")

    # Logging
    log_level: str = os.environ.get("LOG_LEVEL", "info")
    log_format: str = os.environ.get("LOG_FORMAT", "json")
    audit_log_enabled: bool = os.environ.get("AUDIT_LOG_ENABLED", "1") not in ("0", "false", "False")

    # HTTP
    metrics_enabled: bool = os.environ.get("METRICS_ENABLED", "1") not in ("0", "false", "False")
    cors_allow_origins: str = os.environ.get("CORS_ALLOW_ORIGINS", "*")

    # Feelings
    feelings_page_max: int = int(os.environ.get("FEELINGS_PAGE_MAX", "100"))


S = Settings()
