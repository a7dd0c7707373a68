from fastapi import HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from utils.logger import get_logger

logger = get_logger("Global_Exception")

class AppException(HTTPException):
    def __init__(self, status_code: int, detail: str):
        super().__init__(status_code=status_code, detail=detail)

class ValidationError(AppException):
    """Malformed or missing input."""
    def __init__(self, detail: str):
        super().__init__(status.HTTP_400_BAD_REQUEST, detail)

class UnauthorizedError(AppException):
    """Missing, invalid or foreign access token."""
    def __init__(self, detail: str = "Unauthorized"):
        super().__init__(status.HTTP_401_UNAUTHORIZED, detail)
        self.headers = {"WWW-Authenticate": "Bearer"}

class NotFoundError(AppException):
    def __init__(self, detail: str):
        super().__init__(status.HTTP_404_NOT_FOUND, detail)

class ConflictError(AppException):
    def __init__(self, detail: str):
        super().__init__(status.HTTP_409_CONFLICT, detail)

class InternalError(AppException):
    # never carries driver detail to the client
    def __init__(self, detail: str = "Internal server error"):
        super().__init__(status.HTTP_500_INTERNAL_SERVER_ERROR, detail)

async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    first = errors[0] if errors else {}
    field = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
    message = first.get("msg", "Invalid request")
    logger.warning(f"Request validation failed on {request.url.path}: {field}: {message}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": f"{field}: {message}" if field else message}
    )

async def global_exception_handler(request: Request, exc: Exception):
    logger.exception(
        "Unhandled exception",
        extra={"path": request.url.path}
    )
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error"}
    )
