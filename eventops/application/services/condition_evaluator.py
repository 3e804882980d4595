"""Workflow condition evaluation.

A condition is ``{"field": "event.status", "operator": "equals", "value": "confirmed"}``.
``field`` is a dot path into the evaluation context (``{"event": {...}}``);
all conditions of a workflow must pass (AND). No conditions always passes.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any

from eventops.shared.enums import ConditionOperator
from eventops.shared.telemetry.logging import get_logger
from eventops.shared.utils.datetime import parse_iso_datetime

logger = get_logger(__name__)

_NO_VALUE_OPERATORS = frozenset({ConditionOperator.IS_SET, ConditionOperator.IS_NOT_SET})
_LIST_OPERATORS = frozenset({ConditionOperator.IN, ConditionOperator.NOT_IN})


@dataclass(frozen=True)
class ConditionResult:
    condition: dict[str, Any]
    passed: bool
    actual_value: Any = None
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """JSON-safe form stored on the execution record."""
        out: dict[str, Any] = {
            "field": self.condition.get("field"),
            "operator": self.condition.get("operator"),
            "expected_value": _jsonable(self.condition.get("value")),
            "actual_value": _jsonable(self.actual_value),
            "passed": self.passed,
        }
        if self.error:
            out["error"] = self.error
        return out


@dataclass(frozen=True)
class ConditionsEvaluation:
    passed: bool
    results: list[ConditionResult] = field(default_factory=list)

    def to_dicts(self) -> list[dict[str, Any]]:
        return [r.to_dict() for r in self.results]


def _jsonable(value: Any) -> Any:
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Mapping):
        return {str(k): _jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple, set)):
        return [_jsonable(v) for v in value]
    return value


def get_nested_value(obj: Mapping[str, Any] | None, path: str) -> Any:
    """Return the value at a dot path (``event.details.guest_count``), or None."""
    if not obj or not path:
        return None
    current: Any = obj
    for key in path.split("."):
        if current is None:
            return None
        if isinstance(current, Mapping):
            current = current.get(key)
        else:
            current = getattr(current, key, None)
    return current


def _is_set(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, str) and not value.strip():
        return False
    return True


def _normalize(value: Any) -> Any:
    if isinstance(value, str):
        return value.strip().lower()
    if isinstance(value, (datetime, date)):
        return value.isoformat().lower()
    return value


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _compare(actual: Any, expected: Any) -> int | None:
    """Return -1/0/1 comparing numbers, else ISO dates; None when not comparable."""
    if _is_number(actual) and _is_number(expected):
        return (actual > expected) - (actual < expected)
    if not actual or not expected:
        return None
    left = parse_iso_datetime(actual)
    right = parse_iso_datetime(expected)
    if left is None or right is None:
        return None
    return (left > right) - (left < right)


def _apply_operator(operator: ConditionOperator, actual: Any, expected: Any) -> bool:
    if operator == ConditionOperator.EQUALS:
        return _normalize(actual) == _normalize(expected)
    if operator == ConditionOperator.NOT_EQUALS:
        return _normalize(actual) != _normalize(expected)
    if operator in _LIST_OPERATORS:
        if not isinstance(expected, list):
            logger.warning("'%s' operator expects a list value", operator.value)
            return False
        normalized = _normalize(actual)
        found = any(_normalize(v) == normalized for v in expected)
        return found if operator == ConditionOperator.IN else not found
    if operator == ConditionOperator.CONTAINS:
        if not isinstance(actual, str):
            return False
        return str(_normalize(expected)) in _normalize(actual)
    if operator == ConditionOperator.NOT_CONTAINS:
        if not isinstance(actual, str):
            return True
        return str(_normalize(expected)) not in _normalize(actual)
    if operator == ConditionOperator.IS_SET:
        return _is_set(actual)
    if operator == ConditionOperator.IS_NOT_SET:
        return not _is_set(actual)
    if operator == ConditionOperator.GREATER_THAN:
        return _compare(actual, expected) == 1
    if operator == ConditionOperator.LESS_THAN:
        return _compare(actual, expected) == -1
    return False


def evaluate_condition(
    condition: Mapping[str, Any], context: Mapping[str, Any]
) -> ConditionResult:
    """Evaluate one condition; unknown operators fail closed."""
    cond = dict(condition)
    actual = get_nested_value(context, str(cond.get("field") or ""))
    try:
        operator = ConditionOperator(cond.get("operator"))
    except ValueError:
        logger.warning("Unknown condition operator '%s' - failing closed", cond.get("operator"))
        return ConditionResult(
            condition=cond,
            passed=False,
            actual_value=actual,
            error=f"Unknown operator: {cond.get('operator')}",
        )
    return ConditionResult(
        condition=cond,
        passed=_apply_operator(operator, actual, cond.get("value")),
        actual_value=actual,
    )


def evaluate_conditions(
    conditions: list[Mapping[str, Any]] | None, context: Mapping[str, Any]
) -> ConditionsEvaluation:
    """Evaluate all conditions (AND). An empty or missing list passes."""
    if not conditions:
        return ConditionsEvaluation(passed=True)
    results = [evaluate_condition(c, context) for c in conditions]
    passed = all(r.passed for r in results)
    logger.debug(
        "Evaluated %d workflow condition(s): passed=%s", len(results), passed
    )
    return ConditionsEvaluation(passed=passed, results=results)


def validate_conditions(conditions: Any) -> list[str]:
    """Return structural errors for a list of conditions (empty when valid)."""
    if conditions is None:
        return []
    if not isinstance(conditions, list):
        return ["Conditions must be a list"]

    errors: list[str] = []
    for index, condition in enumerate(conditions):
        prefix = f"Condition {index + 1}"
        if not isinstance(condition, Mapping):
            errors.append(f"{prefix}: must be an object")
            continue
        field_path = condition.get("field")
        if not isinstance(field_path, str) or not field_path.strip():
            errors.append(f"{prefix}: field is required and must be a string")
        raw_operator = condition.get("operator")
        if not raw_operator:
            errors.append(f"{prefix}: operator is required")
            continue
        try:
            operator = ConditionOperator(raw_operator)
        except ValueError:
            errors.append(f"{prefix}: unknown operator '{raw_operator}'")
            continue
        value = condition.get("value")
        if operator not in _NO_VALUE_OPERATORS and value is None:
            errors.append(f"{prefix}: value is required for operator '{operator.value}'")
        if operator in _LIST_OPERATORS and not isinstance(value, list):
            errors.append(f"{prefix}: value must be a list for operator '{operator.value}'")
    return errors
