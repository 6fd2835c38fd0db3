"""JSON-file implementation of :class:`~wg_waybar.core.protocols.StateStore`.

File shape
----------
* ``{}`` — the last toggle succeeded (or nothing was recorded yet).
* ``{"error": {"<interface>": "<message>"}}`` — the last toggle failed.

A missing ``"error"`` key and ``"error": null`` both mean "no error".
The file is overwritten as a whole on every toggle; there is no merging
across interfaces.
"""

from __future__ import annotations

import contextlib
import fcntl
import json
import logging
from collections.abc import Iterator
from pathlib import Path

from wg_waybar.core.models import PersistedState
from wg_waybar.exceptions import StateError
from wg_waybar.infra.paths import hand_over, write_owned

logger = logging.getLogger(__name__)

DEFAULT_STATE_FILENAME = "status.json"


class JsonStateStore:
    """Persisted last-toggle errors backed by a small JSON file."""

    def __init__(self, path: Path) -> None:
        self.path: Path = path

    @property
    def lock_path(self) -> Path:
        return self.path.with_name(self.path.name + ".lock")

    # ------------------------------------------------------------------
    # Protocol methods
    # ------------------------------------------------------------------

    def load(self) -> PersistedState:
        try:
            raw = self.path.read_bytes()
        except OSError as exc:
            raise StateError(f"I/O error: {exc}") from exc
        try:
            document = json.loads(raw)
        except ValueError as exc:
            raise StateError(f"SerdeError: {exc}") from exc
        return self._decode(document)

    def save(self, errors: PersistedState) -> None:
        document: dict[str, object] = {"error": dict(errors)} if errors else {}
        write_owned(self.path, json.dumps(document))
        logger.debug("Wrote %s: %s", self.path, document)

    # ------------------------------------------------------------------
    # Bootstrap / locking
    # ------------------------------------------------------------------

    def ensure_exists(self) -> None:
        """Create the file as ``{}`` when it is missing."""
        if not self.path.exists():
            write_owned(self.path, "{}")

    @contextlib.contextmanager
    def locked(self) -> Iterator[None]:
        """Hold an exclusive advisory lock for the duration of the block.

        Serialises concurrent toggles; readers do not take the lock.
        """
        try:
            handle = open(self.lock_path, "a")
        except OSError as exc:
            raise StateError(f"I/O error: cannot open {self.lock_path}: {exc}") from exc
        with handle:
            hand_over(self.lock_path)
            fcntl.flock(handle.fileno(), fcntl.LOCK_EX)
            try:
                yield
            finally:
                fcntl.flock(handle.fileno(), fcntl.LOCK_UN)

    # ------------------------------------------------------------------
    # Decoding
    # ------------------------------------------------------------------

    @staticmethod
    def _decode(document: object) -> PersistedState:
        if not isinstance(document, dict):
            raise StateError("SerdeError: state file must contain a JSON object")
        errors = document.get("error")
        if errors is None:
            return {}
        if not isinstance(errors, dict) or not all(
            isinstance(key, str) and isinstance(value, str)
            for key, value in errors.items()
        ):
            raise StateError(
                "SerdeError: \"error\" must map interface names to messages",
            )
        return dict(errors)
