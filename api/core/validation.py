"""
Declarative field rules for request payloads.

Each feature declares a tuple of `FieldRule`s; `validate` walks them in order
and raises `ValidationFailed` for the first field that breaks its rule.

Kinds:
- text:   non-empty after stripping whitespace
- id:     positive integer
- amount: number >= 0 (zero is a legitimate amount)
- date:   a date / ISO date string
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any, Iterable, Mapping

from .errors import ValidationFailed

TEXT = "text"
ID = "id"
AMOUNT = "amount"
DATE = "date"


@dataclass(frozen=True)
class FieldRule:
    name: str
    kind: str = TEXT
    required: bool = True


def text(name: str, *, required: bool = True) -> FieldRule:
    return FieldRule(name, TEXT, required)


def ident(name: str, *, required: bool = True) -> FieldRule:
    return FieldRule(name, ID, required)


def amount(name: str, *, required: bool = True) -> FieldRule:
    return FieldRule(name, AMOUNT, required)


def day(name: str, *, required: bool = True) -> FieldRule:
    return FieldRule(name, DATE, required)


def _is_missing(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str) and not value.strip():
        return True
    return False


def _check(rule: FieldRule, value: Any) -> str | None:
    if rule.kind == ID:
        if isinstance(value, bool):
            return f"{rule.name} must be a valid number"
        try:
            number = int(value)
        except (TypeError, ValueError):
            return f"{rule.name} must be a valid number"
        if number <= 0:
            return f"{rule.name} is mandatory"
        return None

    if rule.kind == AMOUNT:
        if isinstance(value, bool):
            return f"{rule.name} must be a valid number"
        try:
            number = Decimal(str(value))
        except InvalidOperation:
            return f"{rule.name} must be a valid number"
        if not number.is_finite():
            return f"{rule.name} must be a valid number"
        if number < 0:
            return f"{rule.name} must not be negative"
        return None

    if rule.kind == DATE:
        if isinstance(value, date):
            return None
        try:
            date.fromisoformat(str(value)[:10])
        except ValueError:
            return f"{rule.name} must be a valid date"
        return None

    if not isinstance(value, str):
        return f"{rule.name} must be text"
    return None


def validate(payload: Mapping[str, Any], rules: Iterable[FieldRule]) -> None:
    for rule in rules:
        value = payload.get(rule.name)
        if _is_missing(value):
            if rule.required:
                raise ValidationFailed(f"{rule.name} is mandatory")
            continue
        problem = _check(rule, value)
        if problem is not None:
            raise ValidationFailed(problem)
