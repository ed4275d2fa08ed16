"""Entry point for the demo API."""

import uvicorn

from deadyet.config import Settings


def main():
    """Start the demo API server."""
    settings = Settings.from_env()
    uvicorn.run("demo_api.api:app", host=settings.api_host, port=settings.api_port, reload=True)


if __name__ == "__main__":
    main()
