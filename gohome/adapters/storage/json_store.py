"""Per-workspace team records, kept as one JSON file in the bot's store dir.

The controller records the team it is connected to on every start, so the
file always holds the latest bot user and workspace URL for each team id.
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, List

TEAMS_FILE = "teams.json"


class TeamStore:
    """Team records under ``<storage_dir>/teams.json``, keyed by ``id``."""

    def __init__(self, storage_dir: str):
        self.path = Path(storage_dir) / TEAMS_FILE

    def teams(self) -> List[Dict[str, Any]]:
        """All stored team records; a missing or unreadable file reads as none."""
        try:
            records = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            return []
        if not isinstance(records, list):
            return []
        return [r for r in records if isinstance(r, dict)]

    def save_team(self, team: Dict[str, Any]) -> None:
        """Upsert by ``id``: a reconnect to the same team replaces its record."""
        records = [t for t in self.teams() if t.get("id") != team.get("id")]
        records.append(team)
        self._write(records)

    def _write(self, records: List[Dict[str, Any]]) -> None:
        # Write beside the target then rename, so a crash never leaves half a file
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(dir=str(self.path.parent), prefix="teams.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(records, f, ensure_ascii=False, indent=2)
            os.replace(tmp, self.path)
        except BaseException:
            try:
                os.unlink(tmp)
            except OSError:
                pass
            raise
