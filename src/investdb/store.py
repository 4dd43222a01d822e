"""Record store contract and its DynamoDB implementation."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable

import boto3
from botocore.config import Config as BotoConfig
from botocore.exceptions import BotoCoreError, ClientError

from investdb.config import InvestdbConfig
from investdb.errors import StorageBackendError
from investdb.filters import CompiledFilter

logger = logging.getLogger(__name__)

CONDITIONAL_CHECK_FAILED = "ConditionalCheckFailedException"


class PreconditionFailed(Exception):
    """Raised by a store when a conditional write's precondition does not hold."""


@dataclass
class ScanPage:
    items: list[dict[str, Any]] = field(default_factory=list)
    last_evaluated_key: dict[str, Any] | None = None


@dataclass
class UpdateRequest:
    """A SET update expression with its placeholder bindings."""

    expression: str
    names: dict[str, str]
    values: dict[str, Any]
    condition: str


@runtime_checkable
class RecordStore(Protocol):
    """Store operations the query/mutation layer depends on."""

    def get_item(self, key: int) -> dict[str, Any] | None: ...

    def scan_page(
        self,
        compiled: CompiledFilter | None = None,
        start_key: dict[str, Any] | None = None,
    ) -> ScanPage: ...

    def put_item_if_absent(self, record: dict[str, Any]) -> None: ...

    def update_item_if_present(self, key: int, update: UpdateRequest) -> dict[str, Any]: ...

    def delete_item(self, key: int) -> dict[str, Any] | None: ...


def _error_code(err: Exception) -> str:
    if isinstance(err, ClientError):
        return str(err.response.get("Error", {}).get("Code", ""))
    return ""


def create_table_resource(config: InvestdbConfig) -> Any:
    """Create a boto3 DynamoDB Table resource from config."""
    session = boto3.Session(region_name=config.region)
    resource = session.resource(
        "dynamodb",
        region_name=config.region,
        endpoint_url=config.endpoint_url,
        config=BotoConfig(
            connect_timeout=config.request_timeout_s,
            read_timeout=config.request_timeout_s,
            retries={"max_attempts": config.max_attempts, "mode": "standard"},
        ),
    )
    return resource.Table(config.table_name)


class DynamoRecordStore:
    """DynamoDB-backed record store using the boto3 resource layer.

    Numbers come back as ``Decimal``; callers write ``int`` or ``Decimal``.
    """

    def __init__(self, config: InvestdbConfig, *, table: Any | None = None) -> None:
        self._config = config
        self.key_field = config.key_field
        self._table = table if table is not None else create_table_resource(config)

    @property
    def table_name(self) -> str:
        return self._config.table_name

    def _call(self, operation: str, **kwargs: Any) -> dict[str, Any]:
        logger.debug("DynamoDB %s on table %s", operation, self._config.table_name)
        try:
            return getattr(self._table, operation)(**kwargs)
        except ClientError as e:
            if _error_code(e) == CONDITIONAL_CHECK_FAILED:
                raise PreconditionFailed(operation) from e
            raise StorageBackendError(operation, str(e)) from e
        except BotoCoreError as e:
            raise StorageBackendError(operation, str(e)) from e

    def get_item(self, key: int) -> dict[str, Any] | None:
        resp = self._call("get_item", Key={self.key_field: key})
        return resp.get("Item")

    def scan_page(
        self,
        compiled: CompiledFilter | None = None,
        start_key: dict[str, Any] | None = None,
    ) -> ScanPage:
        kwargs: dict[str, Any] = {}
        if compiled is not None:
            kwargs.update(compiled.scan_kwargs())
        if start_key is not None:
            kwargs["ExclusiveStartKey"] = start_key
        resp = self._call("scan", **kwargs)
        return ScanPage(
            items=list(resp.get("Items", [])),
            last_evaluated_key=resp.get("LastEvaluatedKey") or None,
        )

    def put_item_if_absent(self, record: dict[str, Any]) -> None:
        self._call(
            "put_item",
            Item=record,
            ConditionExpression="attribute_not_exists(#id)",
            ExpressionAttributeNames={"#id": self.key_field},
        )

    def update_item_if_present(self, key: int, update: UpdateRequest) -> dict[str, Any]:
        resp = self._call(
            "update_item",
            Key={self.key_field: key},
            UpdateExpression=update.expression,
            ExpressionAttributeNames=update.names,
            ExpressionAttributeValues=update.values,
            ConditionExpression=update.condition,
            ReturnValues="ALL_NEW",
        )
        return resp.get("Attributes") or {}

    def delete_item(self, key: int) -> dict[str, Any] | None:
        resp = self._call(
            "delete_item",
            Key={self.key_field: key},
            ReturnValues="ALL_OLD",
        )
        return resp.get("Attributes") or None
