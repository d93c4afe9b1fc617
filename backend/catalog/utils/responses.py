"""
Response envelopes shared by all endpoints.
"""

from typing import Any, Optional

from fastapi import Response
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse


def success_response(data: Optional[dict], message: str, status_code: int = 200) -> Response:
    """Wrap a payload in the success envelope. 204 responses carry no body."""
    if status_code == 204:
        return Response(status_code=204)

    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder({
            "status": "success",
            "message": message,
            "data": data,
        })
    )


def error_response(status: str, message: str, status_code: int, details: Any = None) -> JSONResponse:
    """Wrap an error in the error envelope."""
    content = {"status": status, "message": message}
    if details:
        content["details"] = details
    return JSONResponse(status_code=status_code, content=jsonable_encoder(content))
