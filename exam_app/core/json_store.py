"""Whole-document JSON persistence used by the question and result stores."""

from __future__ import annotations

import json
import logging
from copy import deepcopy
from pathlib import Path

logger = logging.getLogger(__name__)


class JsonDocument:
    """A JSON array stored in a single file, always read and written in full.

    There is no partial-write or migration format: every mutation rewrites
    the whole document, pretty-printed with two-space indentation.
    """

    def __init__(self, path: Path, default: list | None = None) -> None:
        self.path = Path(path)
        self._default = [] if default is None else default

    def ensure(self, initial: list | None = None) -> bool:
        """Create the file with *initial* contents if it does not exist yet.

        Returns True when the file was created.
        """
        if self.path.exists():
            return False
        self.write(deepcopy(self._default if initial is None else initial))
        logger.info("Created data file %s", self.path)
        return True

    def read(self) -> list:
        """Return the parsed document, or a copy of the default when unreadable."""
        try:
            raw = self.path.read_text(encoding="utf-8")
            data = json.loads(raw)
        except (OSError, json.JSONDecodeError):
            logger.exception("Error reading JSON from %s", self.path)
            return deepcopy(self._default)
        if not isinstance(data, list):
            logger.error("Expected a JSON array in %s, found %s", self.path, type(data).__name__)
            return deepcopy(self._default)
        return data

    def write(self, data: list) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")
