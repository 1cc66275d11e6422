from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from app.logger_config import logger


def register_error_handlers(app: FastAPI):
    @app.exception_handler(Exception)
    async def handle_exception(request: Request, exc: Exception):
        # Log the exception with traceback; the client only gets a generic message
        logger.exception(f"Unhandled exception on {request.method} {request.url.path}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "success": False,
                "message": "Internal Server Error",
                "status_code": 500,
            },
        )
