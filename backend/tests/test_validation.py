import pytest

from devconnector.core.errors import ValidationError
from devconnector.services.avatar import gravatar_url
from devconnector.services.validation import (
    LOGIN_RULES,
    REGISTER_RULES,
    TEXT_RULES,
    collect_errors,
    is_email,
    validate,
)


def test_register_rules_report_every_failure():
    errors = collect_errors({}, REGISTER_RULES)
    assert [e["param"] for e in errors] == ["name", "email", "password"]
    assert [e["msg"] for e in errors] == [
        "Name is required",
        "Please enter a valid email",
        "Please enter a password with 6 or more characters",
    ]
    assert all(e["location"] == "body" for e in errors)


def test_register_rules_accept_valid_payload():
    payload = {"name": "Alice", "email": "a@x.com", "password": "secret1"}
    assert collect_errors(payload, REGISTER_RULES) == []


def test_short_password_is_the_only_error():
    payload = {"name": "Alice", "email": "a@x.com", "password": "12345"}
    errors = collect_errors(payload, REGISTER_RULES)
    assert [e["param"] for e in errors] == ["password"]


def test_blank_name_is_rejected():
    payload = {"name": "   ", "email": "a@x.com", "password": "secret1"}
    assert [e["param"] for e in collect_errors(payload, REGISTER_RULES)] == ["name"]


def test_login_rules_only_need_password_present():
    assert collect_errors({"email": "a@x.com", "password": ""}, LOGIN_RULES) == []
    errors = collect_errors({"email": "a@x.com"}, LOGIN_RULES)
    assert errors == [{"msg": "Password is required", "param": "password", "location": "body"}]


@pytest.mark.parametrize("value", ["a@x.com", "first.last@devconnector.io", "dev@site.test"])
def test_is_email_accepts_addresses(value):
    assert is_email(value)


@pytest.mark.parametrize("value", ["", "plainaddress", "a@", "@x.com", None, 12])
def test_is_email_rejects_non_addresses(value):
    assert not is_email(value)


def test_validate_raises_with_all_errors():
    with pytest.raises(ValidationError) as exc_info:
        validate({"text": ""}, TEXT_RULES)
    assert exc_info.value.to_body() == {
        "errors": [{"msg": "Text is required", "param": "text", "location": "body"}]
    }


def test_validate_passes_silently():
    validate({"text": "hello"}, TEXT_RULES)


def test_gravatar_url_uses_normalized_email_hash():
    url = gravatar_url("MyEmailAddress@example.com ")
    assert url.startswith("//www.gravatar.com/avatar/0bc83cb571cd1c50ba6f3e8a78ef1346?")
    assert "s=200" in url
    assert "r=pg" in url
    assert "d=mm" in url


def test_gravatar_url_is_deterministic():
    assert gravatar_url("A@X.com") == gravatar_url("a@x.com")
    assert gravatar_url("a@x.com") != gravatar_url("b@x.com")
