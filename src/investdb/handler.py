"""API Gateway Lambda proxy handler for ``/investment``."""

from __future__ import annotations

import json
import logging
import re
from decimal import Decimal
from typing import Any

from pydantic import BaseModel

from investdb.config import InvestdbConfig
from investdb.errors import InvestdbError
from investdb.results import Outcome, OutcomeKind
from investdb.service import InvestmentService
from investdb.store import DynamoRecordStore

logger = logging.getLogger(__name__)

_ID_PATH_RE = re.compile(r"^/investment/(\d+)$")

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "POST,GET,OPTIONS,DELETE,PUT,PATCH",
    "Access-Control-Allow-Headers": "Content-Type,X-CSRF-TOKEN",
}

_OUTCOME_STATUS = {
    OutcomeKind.CONFLICT: 409,
    OutcomeKind.NOT_FOUND: 404,
    OutcomeKind.VALIDATION: 400,
}

_service: InvestmentService | None = None


class ApiResponse(BaseModel):
    """Response envelope: status "0" on success, "1" on failure."""

    status: str
    message: str
    data: Any = None
    error: Any = None


def configure_logging(level: str = "INFO") -> None:
    logging.getLogger().setLevel(getattr(logging, level.upper(), logging.INFO))


def get_service() -> InvestmentService:
    """Process-wide service, created on first use and reused across invocations."""
    global _service
    if _service is None:
        config = InvestdbConfig.from_env()
        configure_logging(config.log_level)
        _service = InvestmentService(DynamoRecordStore(config), key_field=config.key_field)
    return _service


def set_service(service: InvestmentService | None) -> None:
    """Replace the process-wide service (None resets it)."""
    global _service
    _service = service


def to_jsonable(value: Any) -> Any:
    """Convert DynamoDB values (``Decimal``) into JSON-native types."""
    if isinstance(value, Decimal):
        return int(value) if value == value.to_integral_value() else float(value)
    if isinstance(value, dict):
        return {k: to_jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple, set)):
        return [to_jsonable(v) for v in value]
    return value


def create_response(
    status: str,
    code: int,
    message: str,
    data: Any = None,
    error: Any = None,
) -> dict[str, Any]:
    envelope = ApiResponse(
        status=status,
        message=message,
        data=to_jsonable(data),
        error=error,
    )
    return {
        "statusCode": code,
        "body": envelope.model_dump_json(),
        "headers": dict(CORS_HEADERS),
    }


def _ok(code: int, data: Any = None) -> dict[str, Any]:
    return create_response("0", code, "OK", data)


def _fail(code: int, message: str, error: Any = None) -> dict[str, Any]:
    return create_response("1", code, message, None, error)


def extract_id_from_path(path: str | None) -> int | None:
    match = _ID_PATH_RE.match(path or "")
    if not match:
        return None
    return int(match.group(1))


def parse_body(body: Any) -> dict[str, Any] | None:
    """Parse a JSON object body; None when absent, malformed or not an object."""
    if not body:
        return None
    if isinstance(body, dict):
        return body
    try:
        parsed = json.loads(body, parse_float=Decimal)
    except (TypeError, ValueError) as e:
        logger.warning("Failed to parse request body: %s", e)
        return None
    return parsed if isinstance(parsed, dict) else None


def _from_outcome(outcome: Outcome, success_code: int = 200) -> dict[str, Any]:
    if outcome.is_ok:
        return _ok(success_code, outcome.record)
    return _fail(_OUTCOME_STATUS[outcome.kind], outcome.message)


def _handle_get(service: InvestmentService, event: dict[str, Any]) -> dict[str, Any]:
    investment_id = extract_id_from_path(event.get("path"))
    if investment_id is not None:
        return _from_outcome(service.get_by_key(investment_id))
    items = service.list_from_query(event.get("queryStringParameters") or {})
    return _ok(200, items)


def _handle_post(service: InvestmentService, event: dict[str, Any]) -> dict[str, Any]:
    payload = parse_body(event.get("body"))
    if payload is None:
        return _fail(400, "Invalid request body")
    return _from_outcome(service.create(payload), success_code=201)


def _handle_put(service: InvestmentService, event: dict[str, Any]) -> dict[str, Any]:
    investment_id = extract_id_from_path(event.get("path"))
    if investment_id is None:
        return _fail(400, "Invalid PUT Path")
    payload = parse_body(event.get("body"))
    if payload is None:
        return _fail(400, "Invalid request body")
    return _from_outcome(service.update(investment_id, payload))


def _handle_delete(service: InvestmentService, event: dict[str, Any]) -> dict[str, Any]:
    investment_id = extract_id_from_path(event.get("path"))
    if investment_id is None:
        return _fail(400, "Invalid DELETE Path")
    outcome = service.delete(investment_id)
    if not outcome.is_ok:
        return _from_outcome(outcome)
    return _ok(204)


_ROUTES = {
    "GET": _handle_get,
    "POST": _handle_post,
    "PUT": _handle_put,
    "DELETE": _handle_delete,
}


def lambda_handler(event: dict[str, Any], context: Any = None) -> dict[str, Any]:
    """Dispatch an API Gateway proxy event to the investment service."""
    route = _ROUTES.get(str(event.get("httpMethod", "")).upper())
    if route is None:
        return _fail(405, "Method Not Allowed")
    try:
        return route(get_service(), event)
    except InvestdbError as e:
        logger.exception("Handler error")
        return _fail(500, "Internal Server Error", {"message": str(e)})
    except Exception as e:
        logger.exception("Unexpected handler error")
        return _fail(500, "Internal Server Error", {"message": str(e)})
