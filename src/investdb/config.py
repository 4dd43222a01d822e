"""Configuration for the investdb service."""

from __future__ import annotations

import os
from dataclasses import dataclass

from investdb.errors import ConfigurationError

DEFAULT_REGION = "us-east-1"


@dataclass
class InvestdbConfig:
    """Configuration for the investment store and its DynamoDB client."""

    table_name: str
    region: str = DEFAULT_REGION
    endpoint_url: str | None = None
    request_timeout_s: float = 10.0
    max_attempts: int = 5
    key_field: str = "id"
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, *, table_name: str | None = None) -> InvestdbConfig:
        """Build config from the Lambda/CLI environment.

        INVESTMENT_TABLE_NAME is required unless ``table_name`` is passed.
        """
        resolved_table = table_name or os.getenv("INVESTMENT_TABLE_NAME")
        if not resolved_table:
            raise ConfigurationError("INVESTMENT_TABLE_NAME environment variable is not defined.")
        region = os.getenv("AWS_REGION") or os.getenv("AWS_DEFAULT_REGION") or DEFAULT_REGION
        return cls(
            table_name=resolved_table,
            region=region,
            endpoint_url=os.getenv("DYNAMODB_ENDPOINT") or None,
            log_level=os.getenv("INVESTDB_LOG_LEVEL", "INFO"),
        )
