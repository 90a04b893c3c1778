# backend/utils/validation.py
import re
from typing import Any, List, Optional

from backend.models.task import TASK_STATUSES

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
MIN_PASSWORD_LENGTH = 6
MIN_NAME_LENGTH = 2
# bcrypt only looks at the first 72 bytes
MAX_PASSWORD_BYTES = 72

# ---------------------- MESSAGES ----------------------
NAME_ERROR = "Name must be at least 2 characters long"
EMAIL_ERROR = "Please provide a valid email address"
PASSWORD_REQUIRED_ERROR = "Password is required"
PASSWORD_LENGTH_ERROR = f"Password must be at least {MIN_PASSWORD_LENGTH} characters long"
PASSWORD_TOO_LONG_ERROR = f"Password must be at most {MAX_PASSWORD_BYTES} bytes long"
TITLE_REQUIRED_ERROR = "Title is required and must not be empty"
TITLE_EMPTY_ERROR = "Title must not be empty"
STATUS_ERROR = "Status must be one of: " + ", ".join(TASK_STATUSES)


def validate_email(email: Any) -> bool:
    return isinstance(email, str) and EMAIL_RE.match(email) is not None


def validate_password(password: Any) -> List[str]:
    """Return the list of problems with a password; empty means valid."""
    if not isinstance(password, str) or password == "":
        return [PASSWORD_REQUIRED_ERROR]
    errors = []
    if len(password) < MIN_PASSWORD_LENGTH:
        errors.append(PASSWORD_LENGTH_ERROR)
    if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        errors.append(PASSWORD_TOO_LONG_ERROR)
    return errors


def validate_name(name: Any) -> bool:
    return isinstance(name, str) and len(name.strip()) >= MIN_NAME_LENGTH


def validate_task_title(title: Any) -> bool:
    return isinstance(title, str) and len(title.strip()) > 0


def validate_task_status(status: Optional[str]) -> bool:
    return status in TASK_STATUSES
