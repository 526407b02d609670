"""Application entrypoint for the FastAPI service."""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from freelance_hub.api.v1.errors import register_error_handlers
from freelance_hub.api.v1.router import get_api_router
from freelance_hub.core.config import get_config
from freelance_hub.core.logging_config import configure_logging


def create_app() -> FastAPI:
    """Create the FastAPI application."""
    cfg = get_config()
    configure_logging()

    app = FastAPI(title=cfg.APP_NAME, version=cfg.APP_VERSION)
    if cfg.CORS_ORIGINS:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=list(cfg.CORS_ORIGINS),
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )
    register_error_handlers(app)
    app.include_router(get_api_router(cfg.API_PREFIX))

    @app.get("/")
    def root() -> dict:
        return {"service": cfg.APP_NAME, "version": cfg.APP_VERSION, "api_prefix": cfg.API_PREFIX}

    return app


# Expose ASGI app for `uvicorn freelance_hub.main:app`.
app = create_app()


if __name__ == "__main__":
    import uvicorn

    from freelance_hub.core.startup import bootstrap

    bootstrap()
    cfg = get_config()
    uvicorn.run("freelance_hub.main:app", host=cfg.API_HOST, port=cfg.API_PORT)
