"""Run the person API with uvicorn: python -m person_service."""

import uvicorn

from person_service.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "person_service.main:app",
        host=settings.app_address,
        port=settings.app_port,
    )


if __name__ == "__main__":
    main()
