from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.engine import Engine
from airport_api.config import Settings, settings
from airport_api.database import Base, build_session_factory, create_db_engine
from airport_api.errors import AirportApiError, ErrorKind, INTERNAL_SERVER_ERROR
from airport_api.services.reference_importer import ReferenceImporter
import logging

# Configure basic logging
logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)


def create_app(app_settings: Settings = settings, engine: Optional[Engine] = None) -> FastAPI:
    """
    Build the API. The engine is opened once per process, the reference workbook is
    imported before the first request is served, and the engine is disposed on shutdown.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        db_engine = engine or create_db_engine(
            app_settings.database_url,
            app_settings.db_pool_size,
            app_settings.db_max_overflow
        )
        Base.metadata.create_all(bind=db_engine)
        app.state.session_factory = build_session_factory(db_engine)

        if app_settings.import_on_startup:
            # A missing sheet propagates here and aborts startup
            importer = ReferenceImporter(
                app.state.session_factory,
                app_settings.reference_workbook_path,
                app_settings.import_chunk_size
            )
            importer.run()

        yield

        if engine is None:
            db_engine.dispose()

    app = FastAPI(
        title=app_settings.app_name,
        description="Airport lookup by IATA code, enriched with city and country reference data",
        version="1.0.0",
        docs_url="/api-docs",
        lifespan=lifespan
    )

    # CORS setup: open outside production
    origins = ["*"]

    if app_settings.env == "production":
        origins = []
        if app_settings.cors_origins:
            for o in app_settings.cors_origins.split(","):
                o = o.strip()
                if o and o not in origins:
                    origins.append(o)

    logger.info(f"CORS origins: {origins}")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(AirportApiError)
    async def airport_api_error_handler(request: Request, exc: AirportApiError):
        if exc.kind == ErrorKind.STORAGE_FAILURE:
            logger.error(f"Storage failure serving {request.url.path}: {exc.__cause__ or exc}")
        elif exc.kind == ErrorKind.LOOKUP_FAULT:
            logger.warning(f"Lookup fault reported as not found for {request.url.path}: {exc}")
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled error serving {request.url.path}: {exc}", exc_info=exc)
        return JSONResponse(status_code=500, content={"error": INTERNAL_SERVER_ERROR})

    from airport_api.routers import airports, system
    app.include_router(airports.router)
    app.include_router(system.router)

    @app.get("/health")
    def health_check():
        """
        Basic health check endpoint to verify service is running.
        """
        return {"status": "ok", "environment": app_settings.env}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())
