"""Core types, configuration and exceptions for taskprop."""

from .config import Config
from .exceptions import (
    ConfigError,
    DocumentError,
    DocumentNotFoundError,
    FrontmatterError,
    TaskPropError,
)
from .types import (
    COUNTING_OPERATIONS,
    BatchResult,
    Condition,
    ConditionLogic,
    ConditionOperator,
    DirectMapping,
    FrontmatterUpdate,
    OperationMapping,
    OperationType,
    ParsedTask,
    Priority,
    ProcessResult,
    RuleSet,
    TaskProperty,
)

__all__ = [
    "Config",
    "TaskPropError",
    "ConfigError",
    "DocumentError",
    "DocumentNotFoundError",
    "FrontmatterError",
    "TaskProperty",
    "Priority",
    "OperationType",
    "ConditionOperator",
    "ConditionLogic",
    "COUNTING_OPERATIONS",
    "ParsedTask",
    "Condition",
    "DirectMapping",
    "OperationMapping",
    "RuleSet",
    "FrontmatterUpdate",
    "ProcessResult",
    "BatchResult",
]
