"""Canonical enumerations shared by records, rules and the table pipeline."""

from __future__ import annotations

from enum import Enum


class Severity(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    CRITICAL = "Critical"


class RecordKind(str, Enum):
    EVENT = "event"
    INCIDENT = "incident"
    RAW_LOG = "raw_log"


class RuleType(str, Enum):
    THRESHOLD = "Threshold"
    SEQUENCE = "Sequence"
    AGGREGATION = "Aggregation"
    PATTERN = "Pattern"


class TimeWindowUnit(str, Enum):
    SEC = "sec"
    MIN = "min"
    HOURS = "hours"


class LogicalOperator(str, Enum):
    AND = "AND"
    OR = "OR"


class GroupByKey(str, Enum):
    HOSTNAME = "Hostname"
    ATTACKER_IP = "Attacker IP"
    USERNAME = "Username"
    DEVICE_IP = "Device IP"


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"
