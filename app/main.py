"""ASGI entry point: ``uvicorn app.main:app``."""

from app.application import create_app
from app.config import get_settings
from app.utils.logging import setup_logging

settings = get_settings()
setup_logging(settings)

app = create_app(settings)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
    )
