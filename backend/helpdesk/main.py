import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from helpdesk.api.api_v1 import api_router
from helpdesk.core.config import get_settings
from helpdesk.core.migrator import run_migrations
from helpdesk.routers.groups import error_response

settings = get_settings()

logger = logging.getLogger(__name__)

# Body errors meaning "not a JSON object at all" rather than a bad field.
MALFORMED_BODY_ERRORS = {"missing", "model_type", "model_attributes_type", "dict_type"}


@asynccontextmanager
async def lifespan(app: FastAPI):  # noqa: ANN001 - FastAPI signature contract
    if settings.run_migrations_on_startup:
        await run_migrations()
    else:
        logger.info("Startup migrations disabled via configuration")
    yield


app = FastAPI(title=settings.app_name, lifespan=lifespan)
app.include_router(api_router, prefix=settings.api_v1_prefix)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _describe_validation_error(exc: RequestValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = tuple(error.get("loc", ()))
        error_type = error.get("type")
        if error_type == "json_invalid" or (location == ("body",) and error_type in MALFORMED_BODY_ERRORS):
            return "Malformated Data."
        field = ".".join(str(item) for item in location[1:])
        parts.append(f"{field}: {error['msg']}" if field else error["msg"])
    return "; ".join(parts)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    if not request.url.path.startswith(f"{settings.api_v1_prefix}/groups"):
        return await request_validation_exception_handler(request, exc)
    return error_response(status.HTTP_400_BAD_REQUEST, _describe_validation_error(exc))
