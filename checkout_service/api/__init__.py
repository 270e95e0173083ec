# checkout_service/api/__init__.py
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from checkout_service.errors import CheckoutError, InternalError, VALIDATION_ERROR
from checkout_service.utils.logging import get_logger

logger = get_logger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(CheckoutError)
    async def checkout_error_handler(request: Request, exc: CheckoutError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        errors = [
            f"{'.'.join(str(p) for p in err['loc'] if p != 'body')}: {err['msg']}"
            for err in exc.errors()
        ]
        return JSONResponse(
            status_code=400,
            content={
                "success": False,
                "code": VALIDATION_ERROR,
                "message": "Invalid checkout payload.",
                "errors": errors,
            },
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        err = InternalError()
        return JSONResponse(status_code=err.status_code, content=err.to_dict())
