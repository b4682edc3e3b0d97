"""
Static file serving for the prebuilt frontend bundle.

Unknown browser paths fall back to the bundle's index document so that
client-side routing can take over. API paths never fall back.
"""
import logging

from starlette.exceptions import HTTPException
from starlette.responses import Response
from starlette.staticfiles import StaticFiles
from starlette.types import Scope

logger = logging.getLogger(__name__)

API_PREFIX = "api"


def is_api_path(path: str) -> bool:
    """Check a mount-relative path against the API prefix."""
    path = path.lstrip("/")
    return path == API_PREFIX or path.startswith(API_PREFIX + "/")


class SPAStaticFiles(StaticFiles):
    """StaticFiles that serves `index_file` for unmatched non-API GET paths."""

    def __init__(self, *args, index_file: str = "index.html", **kwargs):
        super().__init__(*args, **kwargs)
        self.index_file = index_file

    async def get_response(self, path: str, scope: Scope) -> Response:
        try:
            return await super().get_response(path, scope)
        except HTTPException as exc:
            if exc.status_code != 404 or scope["method"] != "GET" or is_api_path(path):
                raise

        try:
            return await super().get_response(self.index_file, scope)
        except HTTPException as exc:
            if exc.status_code == 404:
                logger.warning(f"{self.index_file} not found. Are you in development mode?")
            raise
