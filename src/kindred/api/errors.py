# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Kindred Contributors

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from kindred.relationships.errors import KindredError


async def kindred_error_handler(request: Request, exc: KindredError) -> JSONResponse:
    """Render a typed engine error as ``{"kind", "detail"}``."""
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


_HTTP_KINDS = {
    404: "not_found",
    405: "method_not_allowed",
    409: "conflict",
    422: "validation_error",
}


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    kind = _HTTP_KINDS.get(exc.status_code, "http_error")
    return JSONResponse(
        status_code=exc.status_code,
        content={"kind": kind, "detail": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    errors = exc.errors()
    detail = "; ".join(
        f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in errors
    )
    return JSONResponse(
        status_code=422,
        content={
            "kind": "validation_error",
            "detail": detail or "Invalid request",
            "errors": jsonable_encoder(errors),
        },
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(KindredError, kindred_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(StarletteHTTPException, http_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, request_validation_handler)  # type: ignore[arg-type]
