"""
Offense state: how many times each address has been blocked, across runs.

Stored as a small human-editable JSON object:

    {
      "198.51.100.50": 3,
      "203.0.113.25": 1
    }

Writes go to <file>.tmp first and are moved over the real file with
os.replace, so a crash mid-write never leaves a truncated state file.
A corrupt state file is an error, not an empty state: silently starting
from zero would quietly reset every attacker back to the shortest block.
"""

import json
import os
from pathlib import Path
from typing import Dict

from .errors import StateError


class OffenseStateStore:
    """In-memory offense counts backed by a JSON file."""

    def __init__(self, path: Path):
        self.path = Path(path)
        self._counts: Dict[str, int] = {}

    def load(self) -> Dict[str, int]:
        """
        Load counts from disk, replacing anything held in memory.

        A missing (or empty) file means no prior offenses. Unreadable or
        malformed content raises StateError.
        """
        if not self.path.exists():
            self._counts = {}
            return self.snapshot()
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                raw = f.read()
        except OSError as e:
            raise StateError(f"Cannot read state file {self.path}: {e}") from e

        if not raw.strip():
            self._counts = {}
            return self.snapshot()

        try:
            data = json.loads(raw)
        except ValueError as e:
            raise StateError(f"State file {self.path} is not valid JSON: {e}") from e
        if not isinstance(data, dict):
            raise StateError(f"State file {self.path} must hold a JSON object")

        counts = {}
        for address, count in data.items():
            # bool is an int subclass; true/false is not a count
            if isinstance(count, bool) or not isinstance(count, int) or count < 0:
                raise StateError(
                    f"State file {self.path} has invalid count for {address}: {count!r}"
                )
            counts[address] = count
        self._counts = counts
        return self.snapshot()

    def increment(self, address: str) -> int:
        """Add one offense for address and return the new count."""
        count = self._counts.get(address, 0) + 1
        self._counts[address] = count
        return count

    def count(self, address: str) -> int:
        return self._counts.get(address, 0)

    def snapshot(self) -> Dict[str, int]:
        """Copy of the current counts."""
        return dict(self._counts)

    def __len__(self) -> int:
        return len(self._counts)

    def save(self) -> None:
        """
        Atomically overwrite the state file with the current counts.

        Raises StateError on failure; the temp file is removed.
        """
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(self._counts, f, indent=2, sort_keys=True)
                f.write("\n")
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, self.path)
        except OSError as e:
            try:
                tmp_path.unlink()
            except OSError:
                pass
            raise StateError(f"Cannot write state file {self.path}: {e}") from e
