import httpx

from infrastructure.config import get_settings

_client: httpx.AsyncClient | None = None


def get_client() -> httpx.AsyncClient:
    """
    Obtiene el cliente HTTP hacia la colección remota (Singleton).
    """
    global _client
    if _client is None:
        settings = get_settings()
        _client = httpx.AsyncClient(base_url=settings.api_url, timeout=settings.timeout)
    return _client


async def close_client() -> None:
    """Cierra el cliente compartido, si existe."""
    global _client
    if _client is not None:
        await _client.aclose()
        _client = None
