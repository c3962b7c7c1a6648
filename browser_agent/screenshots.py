"""
Screenshot storage for Browser Agent.

Screenshots are written to a local directory that the HTTP server
exposes under ``/screenshots``.
"""

import asyncio
import logging
import time
import uuid
from pathlib import Path


logger = logging.getLogger(__name__)

SCREENSHOTS_ROUTE = "/screenshots"


class ScreenshotStore:
    """Saves screenshots and builds their public URLs."""

    def __init__(self, directory: Path):
        self.directory = Path(directory)

    def ensure_directory(self) -> None:
        """Create the screenshots directory if missing."""
        self.directory.mkdir(parents=True, exist_ok=True)

    def new_name(self) -> str:
        """Generate a time-derived name that concurrent requests won't share."""
        return f"shot_{int(time.time() * 1000)}_{uuid.uuid4().hex[:8]}.png"

    async def save(self, name: str, data: bytes) -> Path:
        """Write screenshot bytes under the given name off the event loop.

        Args:
            name: File name from new_name()
            data: PNG image bytes

        Returns:
            Path to the saved file
        """
        path = self.directory / name
        await asyncio.to_thread(self._write, path, data)
        logger.debug("Saved screenshot %s (%d bytes)", path, len(data))
        return path

    def _write(self, path: Path, data: bytes) -> None:
        self.ensure_directory()
        path.write_bytes(data)

    @staticmethod
    def url_for(base_url: str, name: str) -> str:
        """Build the retrieval URL for a stored screenshot."""
        return f"{base_url.rstrip('/')}{SCREENSHOTS_ROUTE}/{name}"
