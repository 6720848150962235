"""
Environment Provider Resolver REST API.

This is the main FastAPI application entry point.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from env_resolver.api import actions
from env_resolver.config import settings
from env_resolver.logger import logger


# --------- Lifespan context manager ----------
@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    logger.info(f"API Startup. Catalog: {settings.CATALOG_BASE_URL}")
    yield
    # Shutdown


# --------- Initialize FastAPI app ----------
app = FastAPI(
    title="Environment Provider Resolver API",
    version="1.0",
    description=(
        "Resolves AWS environments from the entity catalog into the fully hydrated "
        "provider descriptors consumed by deployment templates."
    ),
    openapi_tags=[
        {
            "name": "Actions",
            "description": "Template actions. Describe and run opa:get-env-providers, "
                           "and build app promotion parameters from its result."
        },
        {
            "name": "Health",
            "description": "Liveness check."
        },
    ],
    lifespan=lifespan
)


@app.get("/health", tags=["Health"])
def health():
    return {"status": "ok"}


# Include Routers
app.include_router(actions.router)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("rest_api:app", host=settings.HOST, port=settings.PORT)
