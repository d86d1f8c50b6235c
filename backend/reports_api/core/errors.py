"""
Error responses for the reports API.
"""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from shared.infrastructure.correlation import get_request_id
from shared.utils.exceptions import AppException
from shared.utils.schemas import ErrorResponse


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    body = ErrorResponse(detail=exc.detail, code=exc.code, request_id=get_request_id() or None)
    return JSONResponse(status_code=exc.status_code, content=body.model_dump(by_alias=True, exclude_none=True))


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppException, app_exception_handler)
