"""CLI helpers for building the service from global options."""

from __future__ import annotations

from investdb.config import InvestdbConfig
from investdb.service import InvestmentService
from investdb.store import DynamoRecordStore


def config_from_state() -> InvestdbConfig:
    """Build config from CLI options, falling back to the environment."""
    from investdb.cli import state

    config = InvestdbConfig.from_env(table_name=state.table)
    if state.region:
        config.region = state.region
    if state.endpoint_url:
        config.endpoint_url = state.endpoint_url
    return config


def open_service() -> InvestmentService:
    """Open the investment service using global CLI options."""
    config = config_from_state()
    return InvestmentService(DynamoRecordStore(config), key_field=config.key_field)
