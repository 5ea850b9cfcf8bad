import logging

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from todo_service.core.config import Settings, get_settings
from todo_service.core.errors import TodoError
from todo_service.core.logging_setup import setup_logging
from todo_service.middleware.timing import log_request_duration
from todo_service.routers import tasks

logger = logging.getLogger(__name__)


async def todo_error_handler(request: Request, exc: TodoError):
    logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": str(exc)},
    )


def create_app() -> FastAPI:
    app = FastAPI(
        title="Todo Service",
        description="Task tracking over remote calls, backed by a length-prefixed record file",
        swagger_ui_parameters={"displayRequestDuration": True},
        version="1.0.0",
    )

    app.middleware("http")(log_request_duration)
    app.add_exception_handler(TodoError, todo_error_handler)

    # Include routers
    app.include_router(tasks.router)

    @app.get("/")
    async def root():
        return {
            "message": "Welcome to Todo Service",
            "docs": "/docs",
            "version": "1.0.0",
        }

    @app.get("/health")
    async def health_check():
        return {"status": "healthy"}

    return app


app = create_app()


def serve(settings: Settings | None = None) -> None:
    settings = settings or get_settings()
    setup_logging(settings.log_level)
    logger.info(
        "Serving on %s (store: %s)", settings.server_url, settings.db_file_path
    )
    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        log_config=None,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    serve()
