# backend/utils/response.py
from typing import Any, List, Optional

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse


def send_success(status_code: int, data: Any, message: str = "Success") -> JSONResponse:
    """Wrap a result in the {success, data, message} envelope."""
    return JSONResponse(
        status_code=status_code,
        content={"success": True, "data": jsonable_encoder(data), "message": message},
    )


def send_error(status_code: int, message: str, errors: Optional[List[str]] = None) -> JSONResponse:
    """Wrap a failure in the {success, message, errors?} envelope."""
    content = {"success": False, "message": message}
    if errors:
        content["errors"] = list(errors)
    return JSONResponse(status_code=status_code, content=content)
