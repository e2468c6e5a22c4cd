import copy
import json
import logging
from pathlib import Path
from typing import Any, Iterable, cast

from bcradio.config.constants import JSON_DATA_TYPE

logger = logging.getLogger(__name__)


class PersistentState:
    """Manages persistent state with JSON file backing."""

    def __init__(self, state_file: Path) -> None:
        """Initialize persistent state manager and load from disk.

        Args:
            state_file: Path to the state file.
        """
        self._state: dict[str, Any] = {}
        self._state_file = Path(state_file)

        try:
            with open(self._state_file) as f:
                state_str = f.read()
        except FileNotFoundError:
            # Expected on first run or after pointing at a new state file.
            state_str = None
        except IOError:
            logger.error(f"Could not read state from {state_file}")
            raise

        if state_str:
            self._state = json.loads(state_str)
            logger.info(f"Loaded state from {state_file}")
        else:
            logger.info(f"No existing state file found at {state_file}, starting fresh")

    def set_state(self, path: Iterable[str], value: JSON_DATA_TYPE) -> None:
        """Modifies the state in memory, then dumps the modified state to disk.

        This function should not be made async! We do not want to yield from it before the
        state on disk is updated.

        Args:
            path: The path to store the state under. For example, the skipped albums of a
                listener live under ["listeners", <listener_id>, "skipped_albums"].
            value: The value to store. Only data types that can be serialised to JSON may be
                used, as the state is backed by a JSON store.
        """
        # We don't want to modify the given path directly, so we make a copy here.
        path = list(path)

        if path:
            # Walk down to the dict holding the final key, creating dicts on the way.
            #
            # A `path` of ["playlists", "alice", "road trip"] and a `value` of {...} yields:
            #
            # {"playlists": {"alice": {"road trip": {...}}}}
            key = path.pop()
            current_path = self._state
            for pathname in path:
                current_path = current_path.setdefault(pathname, {})

            current_path[key] = value
        else:
            # No path: replace the whole state, which must be a dict.
            if not isinstance(value, dict):
                raise TypeError("Attempted to override entire state with a non-dict type")

            self._state = value

        self._state_file.parent.mkdir(parents=True, exist_ok=True)
        with open(self._state_file, "w") as f:
            # Indented so a human can read the file when debugging.
            f.write(json.dumps(self._state, indent=2))

    def get_state(self, path: Iterable[str]) -> JSON_DATA_TYPE:
        """Retrieve persistent state at a given path.

        Args:
            path: The path to retrieve the state of.

        Returns:
            The value at the given path. None if the path does not exist, or if None was
            literally stored at this path.
        """
        path = list(path)

        # If path is empty, just return the entire state
        if not path:
            return copy.deepcopy(self._state)

        key = path.pop()
        current_path = self._state
        for pathname in path:
            next_path = current_path.get(pathname)

            if next_path is None or not isinstance(next_path, dict):
                # Dead end.
                return None

            current_path = next_path

        value = current_path.get(key)
        if value is None:
            return None

        # Return a copy so that callers cannot change the state behind our back.
        return cast(JSON_DATA_TYPE, copy.deepcopy(value))

    def delete_state(self, path: Iterable[str]) -> bool:
        """
        Deletes the state at the given path, and any parent dicts left empty by doing so.
        This function writes to disk.

        Args:
            path: The path to delete the state for.

        Returns:
            True if the path was deleted, False if the path did not exist.
        """
        path = list(path)
        if not path:
            # Deleting all state this way is not supported.
            return False

        field_to_delete = path.pop()

        # This should be a dict as we're one level up
        state_at_path = self.get_state(path)
        if state_at_path is None or not isinstance(state_at_path, dict):
            return False

        if field_to_delete not in state_at_path:
            return False

        del state_at_path[field_to_delete]

        # Store the updated parent before recursing, otherwise the recursive call would read
        # the state without the deletion above applied.
        self.set_state(path, state_at_path)

        # Don't leave empty dicts behind in the json store.
        if not state_at_path and path:
            self.delete_state(path)

        return True
