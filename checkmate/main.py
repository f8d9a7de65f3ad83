import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from checkmate.core.config import settings
from checkmate.core.database import engine, init_db
from checkmate.core.errors import register_error_handlers
from checkmate.routers import health, tasks, views

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# Init DB (création + colonnes manquantes)
init_db(engine)

app = FastAPI(
    title="Checkmate Tasks API",
    version="1.0.0"
)

# CORS ouvert par défaut (dev)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

# Routes
app.include_router(health.router)
app.include_router(tasks.router)
app.include_router(views.router)


def run():
    import uvicorn

    logger.info(f"listening on :{settings.PORT}, using DB: {settings.DATABASE_URL}")
    uvicorn.run(app, host=settings.HOST, port=settings.PORT, log_level=settings.LOG_LEVEL.lower())


if __name__ == "__main__":
    run()
