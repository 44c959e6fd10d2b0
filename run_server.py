import uvicorn

from weather_app.config import get_settings
from utils.logging_utils import get_tagged_logger, setup_logging

logger = get_tagged_logger(__name__, tag="server")


def warn_if_unconfigured() -> None:
    """
    Log a warning when OPENWEATHER_API_KEY is missing.

    The server still starts; every lookup will then come back with the
    generic error because the provider rejects the request.
    """
    if not get_settings().openweather_api_key:
        logger.warning("OPENWEATHER_API_KEY is not set; weather lookups will fail.")


def main() -> None:
    settings = get_settings()
    setup_logging(level=settings.log_level, job_name="weather_server")
    warn_if_unconfigured()

    logger.info(f"Server is running on port {settings.port}")
    uvicorn.run(
        "weather_app.main:app",
        host="0.0.0.0",
        port=settings.port,
        reload=False,
        log_config=None,
    )


if __name__ == "__main__":
    main()
