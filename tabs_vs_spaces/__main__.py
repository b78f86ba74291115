"""Run the vote service under uvicorn: python -m tabs_vs_spaces."""

import uvicorn

from tabs_vs_spaces.config.settings import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "tabs_vs_spaces.main:app",
        host=settings.host,
        port=settings.port,
        # Leave uvicorn's loggers on the root JSON handler.
        log_config=None,
    )


if __name__ == "__main__":
    main()
