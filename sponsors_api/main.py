"""ASGI entry point: `uvicorn sponsors_api.main:app`."""

from sponsors_api.app import create_app

app = create_app()
