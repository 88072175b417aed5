"""
The single persisted slot holding the raw access token between runs.
"""

import logging
from pathlib import Path

log = logging.getLogger(__name__)


class TokenStore:
    """Reads, writes and clears a plain-text token file in the config directory."""

    FILENAME = "token"

    def __init__(self, config_dir: Path):
        self.token_path = config_dir / self.FILENAME

    def get(self) -> str | None:
        """Returns the stored token, or None if the slot is empty or unreadable."""
        if not self.token_path.is_file():
            return None
        try:
            token = self.token_path.read_text(encoding="utf-8").strip()
        except OSError as e:
            log.warning(f"[yellow]Could not read stored token:[/] {e}")
            return None
        return token or None

    def set(self, token: str) -> None:
        self.token_path.parent.mkdir(parents=True, exist_ok=True)
        self.token_path.write_text(token, encoding="utf-8")
        try:
            self.token_path.chmod(0o600)
        except OSError:
            log.debug("Could not restrict token file permissions.")

    def remove(self) -> None:
        """Empties the slot. Removing an absent token is a no-op."""
        self.token_path.unlink(missing_ok=True)
