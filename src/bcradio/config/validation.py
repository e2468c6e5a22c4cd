"""Startup validation for bcradio."""

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from bcradio.config.settings import RadioSettings

logger = logging.getLogger(__name__)


def validate_and_setup_directories(settings: "RadioSettings") -> list[str]:
    """Validate state directories exist and are writable, create if needed.

    Args:
        settings: RadioSettings instance containing file paths.

    Returns:
        List of error messages (empty if all OK).
    """
    errors = []

    # Directories that must be writable
    writable_dirs = [
        (settings.data_dir, "data directory"),
        (settings.playlists_file.parent, "playlists directory"),
        (settings.listener_state_file.parent, "listener state directory"),
    ]

    for dir_path, description in writable_dirs:
        try:
            dir_path.mkdir(parents=True, exist_ok=True)
            # Test writability
            test_file = dir_path / ".write_test"
            test_file.touch()
            test_file.unlink()
        except (OSError, PermissionError) as e:
            errors.append(f"Cannot write to {description} ({dir_path}): {e}")

    if settings.playlists_file.exists() and not settings.playlists_file.is_file():
        errors.append(f"Playlists path is not a file: {settings.playlists_file}")

    if not settings.listener_state_file.exists():
        logger.info(
            f"Listener state file does not exist yet: {settings.listener_state_file}"
        )

    return errors
