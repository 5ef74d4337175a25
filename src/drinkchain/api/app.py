"""FastAPI application factory."""
from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from drinkchain.domain.exceptions import ConflictError, NotFoundError
from drinkchain.logging import logger


def create_app() -> FastAPI:
    app = FastAPI(
        title="DrinkChain Supply-Chain Assistant API",
        version="0.1.0",
    )

    # Import routers inside create_app() to avoid circular imports at module load time
    from drinkchain.api.routers.strategies import router as strategies_router
    from drinkchain.api.routers.trends import router as trends_router
    from drinkchain.api.routers.supply import router as supply_router
    from drinkchain.api.routers.chat import router as chat_router

    app.include_router(strategies_router)
    app.include_router(trends_router)
    app.include_router(supply_router)
    app.include_router(chat_router)

    @app.exception_handler(NotFoundError)
    def _not_found(request: Request, exc: NotFoundError) -> JSONResponse:
        return JSONResponse(status_code=404, content={"detail": exc.message})

    @app.exception_handler(ConflictError)
    def _conflict(request: Request, exc: ConflictError) -> JSONResponse:
        return JSONResponse(status_code=409, content={"detail": exc.message})

    @app.exception_handler(ValueError)
    def _invalid(request: Request, exc: ValueError) -> JSONResponse:
        logger.warning("Rejected %s %s: %s", request.method, request.url.path, exc)
        return JSONResponse(status_code=422, content={"detail": str(exc)})

    @app.get("/health", tags=["ops"])
    def health() -> dict:
        return {"status": "ok"}

    return app
