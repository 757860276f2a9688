"""
Declarative request validation.

Each endpoint declares a list of ``Rule`` objects. ``validate`` runs every
rule against the payload and raises a single ``ValidationError`` that
carries all failures, so clients can fix every field in one round trip.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, List
from email_validator import EmailNotValidError, validate_email
from devconnector.core.errors import ValidationError


@dataclass(frozen=True)
class Rule:
    field: str
    message: str
    check: Callable[[Any], bool]


def not_empty(value: Any) -> bool:
    return isinstance(value, str) and value.strip() != ""


def exists(value: Any) -> bool:
    return value is not None


def is_email(value: Any) -> bool:
    if not isinstance(value, str):
        return False
    try:
        # Syntax only - registration must not depend on DNS, and reserved
        # domains such as .test are ordinary addresses here
        validate_email(value, check_deliverability=False, test_environment=True)
    except EmailNotValidError:
        return False
    return True


def min_length(length: int) -> Callable[[Any], bool]:
    def check(value: Any) -> bool:
        return isinstance(value, str) and len(value) >= length
    return check


REGISTER_RULES = [
    Rule("name", "Name is required", not_empty),
    Rule("email", "Please enter a valid email", is_email),
    Rule("password", "Please enter a password with 6 or more characters", min_length(6)),
]

LOGIN_RULES = [
    Rule("email", "Please enter a valid email", is_email),
    Rule("password", "Password is required", exists),
]

TEXT_RULES = [
    Rule("text", "Text is required", not_empty),
]


def collect_errors(payload: Dict[str, Any], rules: List[Rule]) -> List[Dict[str, Any]]:
    """Return one error entry per failed rule, in rule order"""
    return [
        {"msg": rule.message, "param": rule.field, "location": "body"}
        for rule in rules
        if not rule.check(payload.get(rule.field))
    ]


def validate(payload: Dict[str, Any], rules: List[Rule]) -> None:
    errors = collect_errors(payload, rules)
    if errors:
        raise ValidationError(errors)
