import uvicorn
from fastapi import FastAPI
from fastapi.responses import PlainTextResponse
from starlette.middleware.cors import CORSMiddleware

from config import settings
from controllers.controller_books import router as books_router, service_error_handler
from exceptions.exceptions import BaseServiceException
from repositories.repository_books import BookRepository
from services.service_books import BookService

from loguru import logger


def create_app(repository: BookRepository | None = None) -> FastAPI:
    """Build the API around its own store; pass a repository to share or inspect it."""
    app = FastAPI(title="Bookstore API")
    app.state.book_service = BookService(repository if repository is not None else BookRepository())

    app.include_router(books_router)
    app.add_exception_handler(BaseServiceException, service_error_handler)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_methods=["GET", "POST", "PATCH", "DELETE"],
        allow_headers=["Content-Type"],
    )

    @app.get("/", response_class=PlainTextResponse)
    async def root() -> str:
        return "Bookstore API is running"

    return app


app = create_app()

if __name__ == "__main__":
    logger.add(settings.LOG_FILE, retention=settings.LOG_RETENTION, level=settings.LOG_LEVEL)
    logger.info(f"Starting Bookstore API on {settings.APP_HOST}:{settings.APP_PORT}")
    uvicorn.run("main:app", host=settings.APP_HOST, port=settings.APP_PORT)
