"""Static asset serving with fallback to the main page."""

from pathlib import Path

from fastapi import FastAPI
from starlette.exceptions import HTTPException
from starlette.responses import Response
from starlette.staticfiles import StaticFiles
from starlette.types import Scope

INDEX_FILE = "index.html"


class FallbackStaticFiles(StaticFiles):
    """StaticFiles that answers unknown paths with ``index.html``."""

    async def get_response(self, path: str, scope: Scope) -> Response:
        try:
            return await super().get_response(path, scope)
        except HTTPException as e:
            if e.status_code != 404:
                raise
            return await super().get_response(INDEX_FILE, scope)


def mount_static(app: FastAPI, directory: Path) -> None:
    """Serve ``directory`` from the application root.

    Must be called after every other route and mount is registered, since the
    root mount matches any path.
    """
    app.mount("/", FallbackStaticFiles(directory=directory, html=True), name="static")
