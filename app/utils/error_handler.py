"""
Error taxonomy and error handling utilities for the order service
"""

import uuid
import traceback
import logging
from typing import Optional
from datetime import datetime
from fastapi import HTTPException, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)

class ErrorContext:
    """Context object for tracking error information across the request lifecycle"""

    def __init__(self, request: Request):
        self.error_id = str(uuid.uuid4())
        self.request = request
        self.endpoint = str(request.url.path)
        self.method = request.method
        self.client_ip = self._get_client_ip()
        self.user_agent = request.headers.get("user-agent")
        self.timestamp = datetime.utcnow()

    def _get_client_ip(self) -> Optional[str]:
        """Extract client IP from request headers"""
        if "x-forwarded-for" in self.request.headers:
            return self.request.headers["x-forwarded-for"].split(",")[0].strip()
        elif "x-real-ip" in self.request.headers:
            return self.request.headers["x-real-ip"]
        elif self.request.client:
            return self.request.client.host
        return None

class OrderServiceError(Exception):
    """Base class for errors raised by the order core"""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    error_code = "INTERNAL_ERROR"

    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)

class ValidationError(OrderServiceError):
    """Malformed input such as an empty item list or a non-positive price"""
    status_code = status.HTTP_400_BAD_REQUEST
    error_code = "VALIDATION_ERROR"

class NotFoundError(OrderServiceError):
    """Missing record, or a record owned by another tenant"""
    status_code = status.HTTP_404_NOT_FOUND
    error_code = "NOT_FOUND"

class ConflictError(OrderServiceError):
    """Operation not allowed in the record's current state"""
    status_code = status.HTTP_409_CONFLICT
    error_code = "CONFLICT"

class InvalidTransitionError(ConflictError):
    """Requested status change breaks the order workflow"""
    error_code = "INVALID_TRANSITION"

    def __init__(self, from_status: str, to_status: str):
        self.from_status = from_status
        self.to_status = to_status
        super().__init__(f"Cannot change status from {from_status} to {to_status}")

class DatabaseError(OrderServiceError):
    """Custom exception for database-related errors"""
    error_code = "DATABASE_ERROR"

    def __init__(self, message: str, original_error: Optional[Exception] = None):
        self.original_error = original_error
        super().__init__(message)

def to_http_exception(error: OrderServiceError) -> HTTPException:
    """Translate a domain error into the HTTPException a router raises"""
    if isinstance(error, DatabaseError):
        # Never leak driver messages to clients
        return HTTPException(status_code=error.status_code, detail="A database error occurred. Please try again later.")
    return HTTPException(status_code=error.status_code, detail=error.message)

class ErrorHandler:
    """Centralized error response building"""

    @staticmethod
    def create_error_response(
        error_context: ErrorContext,
        error: Exception,
        status_code: int = 500,
        include_details: bool = False
    ) -> JSONResponse:
        """Create a standardized error response"""

        error_data = {
            "error": {
                "code": ErrorHandler._get_error_code(error),
                "message": ErrorHandler._get_user_friendly_message(error),
                "error_id": error_context.error_id,
                "timestamp": error_context.timestamp.isoformat(),
            }
        }

        if include_details:
            error_data["error"]["details"] = {
                "original_error": str(error),
                "error_type": type(error).__name__,
                "stack_trace": traceback.format_exc()
            }

        ErrorHandler._log_error(error_context, error, status_code)

        return JSONResponse(
            status_code=status_code,
            content=error_data
        )

    @staticmethod
    def _get_error_code(error: Exception) -> str:
        if isinstance(error, OrderServiceError):
            return error.error_code
        elif isinstance(error, SQLAlchemyError):
            return "DATABASE_ERROR"
        return "INTERNAL_ERROR"

    @staticmethod
    def _get_user_friendly_message(error: Exception) -> str:
        if isinstance(error, (DatabaseError, SQLAlchemyError)):
            return "A database error occurred. Please try again later."
        elif isinstance(error, OrderServiceError):
            return error.message
        return "An unexpected error occurred. Please try again later."

    @staticmethod
    def _log_error(error_context: ErrorContext, error: Exception, status_code: int):
        """Log error with comprehensive context"""
        logger.error(
            f"Error {error_context.error_id}: {type(error).__name__} in {error_context.method} {error_context.endpoint}",
            extra={
                "error_id": error_context.error_id,
                "endpoint": error_context.endpoint,
                "method": error_context.method,
                "status_code": status_code,
                "client_ip": error_context.client_ip,
                "user_agent": error_context.user_agent,
                "error_type": type(error).__name__,
                "error_message": str(error),
            },
            exc_info=error
        )

class TransactionScope:
    """
    Context manager wrapping a unit of work on an existing session.

    Commits when the block exits cleanly and rolls back on any exception, so
    either every row written inside the block is persisted or none is.
    SQLAlchemy failures are re-raised as DatabaseError.
    """

    def __init__(self, db: Session):
        self.db = db

    def __enter__(self) -> Session:
        return self.db

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is not None:
            self.db.rollback()
            if issubclass(exc_type, SQLAlchemyError):
                logger.error(f"Database transaction error: {exc_val}")
                raise DatabaseError(f"Database transaction failed: {exc_val}", exc_val) from exc_val
            return False

        try:
            self.db.commit()
        except SQLAlchemyError as e:
            logger.error(f"Database commit error: {e}")
            self.db.rollback()
            raise DatabaseError(f"Database transaction failed: {str(e)}", e) from e
        return False
