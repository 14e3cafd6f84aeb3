from __future__ import annotations

import contextlib
import logging
from typing import Callable

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.datastructures import Headers
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from dotenv import load_dotenv

from errors import GatewayError
from persistence.blob_store import SqliteBlobStore
from persistence.errors import StorageFailure
from persistence.interfaces import KeyedBlobStore
from persistence.repositories import GameStateRepositories
from settings import Settings, get_settings

logger = logging.getLogger(__name__)


class BodySizeLimitMiddleware:
    """
    Reject requests whose body exceeds the configured limit.

    A declared Content-Length is checked up front. Bodies without one (chunked)
    are buffered up to the limit and replayed to the app.
    """

    def __init__(self, app: ASGIApp, max_body_bytes: int):
        self.app = app
        self.max_body_bytes = max_body_bytes

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        declared = Headers(scope=scope).get("content-length")
        if declared is not None:
            try:
                size = int(declared)
            except ValueError:
                await JSONResponse({"error": "invalid Content-Length"}, status_code=400)(scope, receive, send)
                return
            if size > self.max_body_bytes:
                await self._too_large(scope, receive, send)
                return
            await self.app(scope, receive, send)
            return

        chunks: list[bytes] = []
        received = 0
        more_body = True
        while more_body:
            message = await receive()
            if message["type"] == "http.disconnect":
                return
            chunk = message.get("body", b"")
            received += len(chunk)
            if received > self.max_body_bytes:
                await self._too_large(scope, receive, send)
                return
            chunks.append(chunk)
            more_body = message.get("more_body", False)

        body = b"".join(chunks)
        replayed = False

        async def replay_receive() -> Message:
            nonlocal replayed
            if not replayed:
                replayed = True
                return {"type": "http.request", "body": body, "more_body": False}
            return await receive()

        await self.app(scope, replay_receive, send)

    @staticmethod
    async def _too_large(scope: Scope, receive: Receive, send: Send) -> None:
        await JSONResponse({"error": "request body too large"}, status_code=413)(scope, receive, send)


class RequestLogMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: Callable):
        response = await call_next(request)
        logger.info("%s %s -> %s", request.method, request.url.path, response.status_code)
        return response


def _install_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(GatewayError)
    async def gateway_error_handler(request: Request, exc: GatewayError):
        return JSONResponse({"error": exc.message}, status_code=exc.status_code)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return JSONResponse({"error": "invalid request body"}, status_code=400)

    @app.exception_handler(StorageFailure)
    async def storage_failure_handler(request: Request, exc: StorageFailure):
        logger.error("Storage failure during %s %s", request.method, request.url.path, exc_info=exc)
        failed = "save failed" if exc.operation == "put" else "load failed"
        return JSONResponse({"error": failed, "details": exc.details}, status_code=500)


def create_app(settings: Settings | None = None, store: KeyedBlobStore | None = None) -> FastAPI:
    load_dotenv("local.env")

    from endpoints.game_endpoints import router as game_router
    from endpoints.health_endpoints import router as health_router

    settings = settings or get_settings()
    if store is None:
        store = SqliteBlobStore(settings.db_path)
        logger.info("Database ready: %s", settings.db_path)

    @contextlib.asynccontextmanager
    async def lifespan(app: FastAPI):
        try:
            yield
        finally:
            store.close()
            logger.info("Server stopped")

    app = FastAPI(lifespan=lifespan)
    app.state.settings = settings
    app.state.store = store
    app.state.repositories = GameStateRepositories.from_store(store)

    if settings.debug_log_requests:
        app.add_middleware(RequestLogMiddleware)
    app.add_middleware(BodySizeLimitMiddleware, max_body_bytes=settings.max_body_bytes)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    _install_error_handlers(app)

    app.include_router(health_router)
    app.include_router(game_router)

    return app


def main() -> None:
    import uvicorn

    load_dotenv("local.env")
    settings = get_settings()
    logging.basicConfig(level=settings.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    app = create_app(settings)
    logger.info("Server listening on %s:%s", settings.host, settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
