"""Record and rule contracts — data structures shared by all modules."""

from src.contracts.enums import (
    GroupByKey,
    LogicalOperator,
    RecordKind,
    RuleType,
    Severity,
    SortDirection,
    TimeWindowUnit,
)
from src.contracts.records import EventRecord, IncidentRecord, RawLogRecord, Record
from src.contracts.rule import CorrelationRule, EventConfig

__all__ = [
    "CorrelationRule",
    "EventConfig",
    "EventRecord",
    "GroupByKey",
    "IncidentRecord",
    "LogicalOperator",
    "RawLogRecord",
    "Record",
    "RecordKind",
    "RuleType",
    "Severity",
    "SortDirection",
    "TimeWindowUnit",
]
