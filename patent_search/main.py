import logging
import os
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from patent_search.api.endpoints import patents, search, similar
from patent_search.core.config import settings
from patent_search.core.logging_config import configure_logging
from patent_search.db.database import Database
from patent_search.middleware.performance_middleware import PerformanceMiddleware

logger = logging.getLogger(__name__)


def create_app(database: Optional[Database] = None) -> FastAPI:
    """
    Build the API. The database handle is opened on startup (unless one is
    given) and disposed on shutdown.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        db = database or Database()
        db.create_all()
        app.state.database = db
        logger.info("Connected to patent store")
        try:
            yield
        finally:
            db.dispose()

    app = FastAPI(
        title=settings.PROJECT_NAME,
        description=settings.DESCRIPTION,
        version=settings.VERSION,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET"],
        allow_headers=["*"],
    )
    app.add_middleware(PerformanceMiddleware)

    @app.get("/")
    async def root():
        return {"message": f"Welcome to the {settings.PROJECT_NAME}"}

    app.include_router(search.router, prefix=settings.API_PREFIX)
    app.include_router(similar.router, prefix=settings.API_PREFIX)
    app.include_router(patents.router, prefix=settings.API_PREFIX)

    return app


configure_logging()
app = create_app()

if __name__ == "__main__":
    port = int(os.environ.get("PORT", 8000))
    uvicorn.run("patent_search.main:app", host="0.0.0.0", port=port, reload=True)
