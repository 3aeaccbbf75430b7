import structlog
from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from starlette.exceptions import HTTPException as StarletteHTTPException
from apis.page_api import error_page, not_found_page
from exceptions.custom_exceptions import BaseAppException, BusinessValidationException
from utils.response_helpers import error_response

logger = structlog.get_logger(__name__)

API_PREFIX = "/api/"


def _is_api_request(request: Request) -> bool:
    return request.url.path.startswith(API_PREFIX)


def setup_exception_handlers(app):

    # Starlette's base class also covers routing 404/405 and fastapi.HTTPException
    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        logger.warning("http_exception", path=request.url.path, status=exc.status_code, detail=exc.detail)
        if not _is_api_request(request):
            return not_found_page() if exc.status_code == 404 else error_page(exc.status_code)
        return error_response(exc.detail, status_code=exc.status_code)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        logger.warning("request_validation_error", path=request.url.path, errors=exc.errors())
        return error_response(
            "Invalid or missing request fields",
            status_code=422,
            details=jsonable_encoder(exc.errors()),
        )

    @app.exception_handler(BusinessValidationException)
    async def business_validation_handler(request: Request, exc: BusinessValidationException):
        logger.info("business_validation_failed", path=request.url.path, error=exc.message)
        return error_response(exc.message, status_code=exc.status_code, details=exc.details or None)

    @app.exception_handler(BaseAppException)
    async def app_exception_handler(request: Request, exc: BaseAppException):
        logger.warning("app_exception", path=request.url.path, error=exc.message, status=exc.status_code)
        return error_response(exc.message, status_code=exc.status_code)

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.error("unhandled_exception", path=request.url.path, error=str(exc), exc_info=exc)
        if not _is_api_request(request):
            return error_page()
        return error_response("Something went wrong on the server", status_code=500)
