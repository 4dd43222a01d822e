"""investdb: filter, sort and guarded writes over a DynamoDB investment table."""

__version__ = "0.1.0"

from investdb.coercion import coerce_field, sanitize_filters, sanitize_payload
from investdb.config import InvestdbConfig
from investdb.errors import (
    ConfigurationError,
    ConflictError,
    InvestdbError,
    NotFoundError,
    StorageBackendError,
    ValidationError,
)
from investdb.filters import CompiledFilter, build_filter, compile_filter
from investdb.guard import WriteGuard, generate_investment_id
from investdb.results import Outcome, OutcomeKind
from investdb.scanner import scan_all
from investdb.service import InvestmentService
from investdb.sorting import SortField, parse_sort_by, sort_items
from investdb.store import DynamoRecordStore, PreconditionFailed, RecordStore, ScanPage

__all__ = [
    "__version__",
    "InvestdbConfig",
    "InvestmentService",
    "RecordStore",
    "DynamoRecordStore",
    "ScanPage",
    "PreconditionFailed",
    "WriteGuard",
    "generate_investment_id",
    "Outcome",
    "OutcomeKind",
    "coerce_field",
    "sanitize_payload",
    "sanitize_filters",
    "CompiledFilter",
    "build_filter",
    "compile_filter",
    "scan_all",
    "SortField",
    "parse_sort_by",
    "sort_items",
    "InvestdbError",
    "ConfigurationError",
    "StorageBackendError",
    "ValidationError",
    "ConflictError",
    "NotFoundError",
]
