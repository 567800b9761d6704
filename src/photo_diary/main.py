"""Command-line entrypoint that serves the API with uvicorn."""

import uvicorn

from photo_diary.config import Settings


def main() -> None:
    """Run the photo diary server on the configured host and port."""
    settings = Settings()
    uvicorn.run("photo_diary.api.asgi:app", host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
