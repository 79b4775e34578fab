"""Run the API with uvicorn: ``python -m dsc_api``."""

import uvicorn

from dsc_api.core.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run("dsc_api.main:app", host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
