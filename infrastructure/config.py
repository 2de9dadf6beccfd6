import os
from dataclasses import dataclass

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


def as_bool(value: str) -> bool:
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _as_timeout(value: str) -> float | None:
    value = value.strip().lower()
    if value in {"", "none", "0"}:
        return None
    return float(value)


def _as_origins(value: str) -> list[str]:
    if value.strip() == "*":
        return ["*"]
    return [origin.strip() for origin in value.split(",") if origin.strip()]


@dataclass(slots=True)
class Settings:
    # Cliente
    api_url: str = "http://127.0.0.1:8000"
    timeout: float | None = 10.0
    notify_mutation_errors: bool = True
    log_level: str = "info"
    # Servidor de desarrollo
    host: str = "127.0.0.1"
    port: int = 8000
    reload: bool = True
    cors_origins: tuple[str, ...] = ("*",)

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            api_url=os.getenv("TASKS_API_URL", "http://127.0.0.1:8000").rstrip("/"),
            timeout=_as_timeout(os.getenv("TASKS_API_TIMEOUT", "10")),
            notify_mutation_errors=as_bool(
                os.getenv("TASKS_NOTIFY_MUTATION_ERRORS", "true")
            ),
            log_level=os.getenv("LOG_LEVEL", "info").lower(),
            host=os.getenv("HOST", "127.0.0.1"),
            port=int(os.getenv("PORT", "8000")),
            reload=as_bool(os.getenv("RELOAD", "true")),
            cors_origins=tuple(_as_origins(os.getenv("CORS_ORIGINS", "*"))),
        )


def get_settings() -> Settings:
    return Settings.from_env()
