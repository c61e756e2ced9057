"""
Application FastAPI de MediaSet.

Initialise l'application web avec le Container DI, monte les routes et,
si la configuration l'active, lance l'enrichissement des images en
arrière-plan pendant toute la durée de vie de l'application.
"""

import asyncio
from contextlib import asynccontextmanager

from fastapi import FastAPI
from loguru import logger

from ..container import Container
from .routes.images import router as images_router
from .routes.lookup import router as lookup_router
from .routes.metadata import router as metadata_router
from .routes.upload import router as upload_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialise le Container DI au démarrage et arrête la tâche de fond à l'arrêt."""
    container = Container()
    container.database.init()
    app.state.container = container

    stop_event = asyncio.Event()
    background_task = None
    if container.config().background_enabled:
        service = container.background_image_lookup_service()
        background_task = asyncio.create_task(service.run_forever(stop_event))

    yield

    stop_event.set()
    if background_task is not None:
        try:
            await asyncio.wait_for(background_task, timeout=10)
        except asyncio.TimeoutError:
            logger.warning("Arrêt forcé de l'enrichissement en arrière-plan")
            background_task.cancel()


app = FastAPI(title="MediaSet", lifespan=lifespan)

# Routes : les préfixes fixes avant la route générique /{media_type}/upload
app.include_router(lookup_router)
app.include_router(metadata_router)
app.include_router(images_router)
app.include_router(upload_router)
