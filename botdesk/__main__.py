"""Run the API server: ``python -m botdesk``."""

import uvicorn

from botdesk.core.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run("botdesk.main:app", host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
