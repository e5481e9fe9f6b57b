"""File-based credential store with remote validation over HTTP."""

import os
import logging
from pathlib import Path

import aiohttp

from ..errors import BackendError
from .base import CredentialBackend

logger = logging.getLogger(__name__)

CREDENTIAL_FILE_NAME = "api_key"
DEFAULT_BASE_URL = "https://api.openai.com"


class FileCredentialBackend(CredentialBackend):
    """Keeps the API key in an owner-only file and validates it against the API."""

    def __init__(self, app_dir: str, base_url: str = DEFAULT_BASE_URL, timeout_sec: float = 10.0):
        """Initialize credential backend.

        Args:
            app_dir: Directory holding the credential file
            base_url: API base URL used for validation requests
            timeout_sec: Total timeout for a validation request
        """
        self.app_dir = Path(app_dir)
        self.credential_file = self.app_dir / CREDENTIAL_FILE_NAME
        self.base_url = base_url
        self.timeout_sec = timeout_sec

        logger.info(f"FileCredentialBackend initialized, validating against: {base_url}")

    async def has_credential(self) -> bool:
        try:
            return self.credential_file.exists() and bool(self.credential_file.read_text(encoding="utf-8").strip())
        except OSError as e:
            raise BackendError(f"Failed to read credential file: {e}") from e

    async def validate_credential(self, candidate: str) -> bool:
        """Ask the API to list models with the candidate key.

        Returns:
            True on 200, False on 401/403

        Raises:
            BackendError: On any other HTTP status
            aiohttp.ClientError: On network failures
        """
        url = f"{self.base_url.rstrip('/')}/v1/models"
        headers = {"Authorization": f"Bearer {candidate}"}
        timeout = aiohttp.ClientTimeout(total=self.timeout_sec)

        async with aiohttp.ClientSession(timeout=timeout) as session:
            async with session.get(url, headers=headers) as response:
                if response.status == 200:
                    return True
                if response.status in (401, 403):
                    logger.info(f"Credential rejected by API ({response.status})")
                    return False
                error_text = await response.text()
                raise BackendError(f"API error: {response.status} - {error_text}")

    async def save_credential(self, candidate: str) -> None:
        try:
            self.app_dir.mkdir(parents=True, exist_ok=True)
            fd = os.open(self.credential_file, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(candidate)
        except OSError as e:
            raise BackendError(f"Failed to store API key: {e}") from e
        logger.info(f"API key stored in {self.credential_file}")

    async def delete_credential(self) -> None:
        if not self.credential_file.exists():
            logger.info("No API key to delete")
            return
        try:
            self.credential_file.unlink()
        except OSError as e:
            raise BackendError(f"Failed to delete API key: {e}") from e
        logger.info("API key deleted")
