import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from conduit import __version__
from conduit.config import settings
from conduit.database import engine
from conduit.logging_config import setup_logging
from conduit.middleware import TimingMiddleware
from conduit.routers import articles, tags, users

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    setup_logging()
    logger.info("Conduit API %s starting (env=%s)", __version__, settings.APP_ENV)
    yield
    # Shutdown
    await engine.dispose()


app = FastAPI(
    title="Conduit API",
    description="Articles, comments, favorites and feeds for a blogging platform",
    version=__version__,
    lifespan=lifespan,
)

# Middleware
app.add_middleware(TimingMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routers
app.include_router(articles.router)
app.include_router(users.router)
app.include_router(tags.router)

@app.get("/health")
async def health():
    return {"status": "healthy", "version": __version__}
