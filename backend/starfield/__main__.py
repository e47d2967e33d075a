"""Run the Starfield API with uvicorn: `python -m starfield`."""

import uvicorn

from starfield.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "starfield.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
