from contextlib import asynccontextmanager
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from .api.api import api_router
from .core.config import API_PREFIX, configure_logging
from .core.exceptions import AppError, FieldError, InternalError, ValidationError
from .db.database import create_tables
from fastapi.responses import JSONResponse
import logging
import json
import traceback

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events"""
    configure_logging()
    # make sure tables are created
    create_tables()
    yield

logger = logging.getLogger("fastapi")

app = FastAPI(title="Post Board API", lifespan=lifespan)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    body = await request.body()
    request_info = {
        "url": str(request.url),
        "method": request.method,
        "body": body.decode() if body else None,
        "path_params": request.path_params,
        "query_params": dict(request.query_params)
    }

    try:
        response = await call_next(request)

        if response.status_code >= 400:
            response_body = b""
            async for chunk in response.body_iterator:
                response_body += chunk

            logger.error(
                f"Request failed with status {response.status_code}\n"
                f"Request: {json.dumps(request_info, indent=2)}\n"
                f"Response: {response_body.decode()}\n"
            )
            return JSONResponse(
                content=json.loads(response_body) if response_body else None,
                status_code=response.status_code,
                headers={
                    key: value for key, value in response.headers.items()
                    if key.lower() != "content-length"
                },
            )

        return response

    except Exception as e:
        logger.error(
            f"Request failed with exception\n"
            f"Request: {json.dumps(request_info, indent=2)}\n"
            f"Error: {str(e)}\n"
            f"Traceback: {traceback.format_exc()}"
        )
        raise


def _field_errors_response(message: str, errors: list[FieldError]) -> JSONResponse:
    for error in errors:
        logger.warning(f"invalid client data - {error.field}: {error.message}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": message, "errors": [error.to_dict() for error in errors]},
    )


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Report every invalid field, in the order pydantic found them"""
    errors = []
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ())]
        field = ".".join(loc[1:]) if len(loc) > 1 else ".".join(loc)
        errors.append(FieldError(field=field, message=err.get("msg", ""), type=err.get("type", "value_error")))
    return _field_errors_response("Invalid request", errors)


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError):
    return _field_errors_response(exc.message, exc.errors)


@app.exception_handler(InternalError)
async def internal_error_handler(request: Request, exc: InternalError):
    logger.error(exc.message, exc_info=exc)
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message},
    )


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


# register the API router
app.include_router(api_router, prefix=API_PREFIX)
