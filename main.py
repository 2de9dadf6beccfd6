import uvicorn

from infrastructure.config import get_settings
from infrastructure.logging_setup import setup_logging


def run() -> None:
    """Arranca la colección remota de desarrollo (dev_server) con uvicorn."""
    settings = get_settings()
    setup_logging(settings.log_level)

    print(
        f"Starting dev task API at http://{settings.host}:{settings.port} "
        f"(Reload: {settings.reload})"
    )

    uvicorn.run(
        "dev_server.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.reload,
        log_level=settings.log_level,
    )


if __name__ == "__main__":
    run()
