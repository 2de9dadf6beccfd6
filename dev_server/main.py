from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from dev_server.api.routes.tasks import router as tasks_router
from dev_server.store import InMemoryTaskCollection
from infrastructure.config import get_settings


def create_app(collection: InMemoryTaskCollection | None = None) -> FastAPI:
    settings = get_settings()

    app = FastAPI(title="Task Sync Dev API")
    app.state.collection = collection or InMemoryTaskCollection()

    # Configure CORS for frontend from environment variables
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(tasks_router)
    return app


app = create_app()
