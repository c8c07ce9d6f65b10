"""Run the API with uvicorn: ``python -m nextflix_api``."""

import uvicorn

from nextflix_api.config import get_settings


def main() -> None:
    """Start the uvicorn server using HOST, PORT and LOG_LEVEL."""
    settings = get_settings()
    uvicorn.run(
        "nextflix_api.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
