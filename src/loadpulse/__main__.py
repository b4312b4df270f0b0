"""Run the service: ``python -m loadpulse``."""

import uvicorn

from loadpulse.config.settings import settings
from loadpulse.main import configure_logging


def main() -> None:
    """Serve the control/update channel on the configured port."""
    configure_logging(settings)
    uvicorn.run(
        "loadpulse.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
