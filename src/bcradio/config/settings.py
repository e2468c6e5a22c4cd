"""Runtime settings for bcradio.

Settings loaded from environment variables and provided to components via dependency injection.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from bcradio.config import constants
from bcradio.player.models import SequencingPolicy


@dataclass(frozen=True)
class RadioSettings:
    """Runtime settings for bcradio."""

    # File paths
    data_dir: Path
    playlists_file: Path
    listener_state_file: Path

    # Listener identity (one per browser/device)
    listener_id: str

    # Catalog access
    identity_cookie: str | None
    history: int
    request_timeout: float | None

    # Playback settings
    sequencing: SequencingPolicy

    # Logging
    log_level: int

    @staticmethod
    def from_environment() -> "RadioSettings":
        """Load settings from environment variables.

        Returns:
            RadioSettings instance with values from environment variables.
        """
        data_dir = Path(os.environ.get("BCRADIO_DATA_DIR", "data"))

        timeout = os.environ.get("BCRADIO_REQUEST_TIMEOUT")
        log_level = logging.getLevelName(
            os.environ.get("BCRADIO_LOG_LEVEL", "INFO").upper()
        )
        if not isinstance(log_level, int):
            log_level = logging.INFO

        return RadioSettings(
            data_dir=data_dir,
            playlists_file=Path(
                os.environ.get(
                    "BCRADIO_PLAYLISTS_FILE", str(data_dir / "playlists.json")
                )
            ),
            listener_state_file=Path(
                os.environ.get(
                    "BCRADIO_LISTENER_STATE_FILE",
                    str(data_dir / "state" / "listener_state.json"),
                )
            ),
            listener_id=os.environ.get(
                "BCRADIO_LISTENER_ID", constants.DEFAULT_LISTENER_ID
            ),
            identity_cookie=os.environ.get("BCRADIO_IDENTITY_COOKIE") or None,
            history=int(
                os.environ.get("BCRADIO_HISTORY", str(constants.DEFAULT_HISTORY))
            ),
            request_timeout=float(timeout) if timeout else None,
            sequencing=SequencingPolicy(
                os.environ.get("BCRADIO_SEQUENCING", SequencingPolicy.SHUFFLE.value)
            ),
            log_level=log_level,
        )

    def validate(self, logger: logging.Logger) -> None:
        """Log warnings for missing optional configuration.

        Args:
            logger: Logger instance to use for warnings.
        """
        if self.identity_cookie is None:
            logger.warning(
                "BCRADIO_IDENTITY_COOKIE is not set, only public collection data will be loaded"
            )

        if self.history < 0:
            logger.warning(
                f"BCRADIO_HISTORY is negative ({self.history}), no additional items will be loaded"
            )
