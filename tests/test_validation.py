import pytest

from backend.utils.validation import (
    PASSWORD_LENGTH_ERROR,
    PASSWORD_REQUIRED_ERROR,
    PASSWORD_TOO_LONG_ERROR,
    validate_email,
    validate_name,
    validate_password,
    validate_task_status,
    validate_task_title,
)


@pytest.mark.parametrize("email", ["jo@x.com", "first.last@sub.domain.org", "a+b@c.io"])
def test_valid_emails(email):
    assert validate_email(email)


@pytest.mark.parametrize("email", ["", "jo", "jo@x", "@x.com", "jo@.com ", "j o@x.com", None, 42])
def test_invalid_emails(email):
    assert not validate_email(email)


def test_password_rules():
    assert validate_password("secret1") == []
    assert validate_password("123456") == []
    assert validate_password("12345") == [PASSWORD_LENGTH_ERROR]
    assert validate_password("") == [PASSWORD_REQUIRED_ERROR]
    assert validate_password(None) == [PASSWORD_REQUIRED_ERROR]


def test_name_is_trimmed_before_length_check():
    assert validate_name("Jo")
    assert not validate_name(" J ")
    assert not validate_name("")
    assert not validate_name(None)


def test_task_title_must_not_be_blank():
    assert validate_task_title("T1")
    assert not validate_task_title("   ")
    assert not validate_task_title("")
    assert not validate_task_title(None)


def test_task_status_enum():
    for status in ("pending", "in_progress", "completed"):
        assert validate_task_status(status)
    assert not validate_task_status("done")
    assert not validate_task_status("")
    assert not validate_task_status(None)


def test_password_byte_limit_counts_utf8_bytes():
    assert validate_password("p" * 72) == []
    assert validate_password("p" * 73) == [PASSWORD_TOO_LONG_ERROR]
    # 25 three-byte characters is 75 bytes
    assert validate_password("€" * 25) == [PASSWORD_TOO_LONG_ERROR]
