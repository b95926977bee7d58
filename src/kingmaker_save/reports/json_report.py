"""
JSON report materializer.
"""

import logging
from pathlib import Path
from typing import Any, List

import orjson

from ..projection import CurrentState

KINGDOM_FILE = "kingdom_stats.json"
CHARACTERS_FILE = "all_characters.json"
SETTLEMENTS_FILE = "settlements.json"
LOCATIONS_FILE = "explored_locations.json"
INVENTORY_FILE = "inventory.json"
STATE_FILE = "CurrentState.json"


def dump_json(data: Any) -> bytes:
    """Serialize report data with 2-space indentation."""
    return orjson.dumps(data, option=orjson.OPT_INDENT_2)


class JsonReportWriter:
    """Writes one JSON file per report section plus the combined state."""

    def __init__(self, output_dir: str | Path):
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.output_dir = Path(output_dir)

    def _write(self, file_name: str, data: Any) -> Path:
        path = self.output_dir / file_name
        with path.open("wb") as f:
            f.write(dump_json(data))
        self.logger.debug(f"Wrote {path}")
        return path

    def write_all(self, state: CurrentState) -> List[Path]:
        """Write every non-empty section and CurrentState.json.

        Returns:
            Paths of the files written
        """
        self.output_dir.mkdir(parents=True, exist_ok=True)
        written: List[Path] = []

        if state.kingdom is not None:
            written.append(self._write(KINGDOM_FILE, state.kingdom.to_dict()))
        if state.characters:
            written.append(
                self._write(CHARACTERS_FILE, [c.to_dict() for c in state.characters])
            )
        if state.settlements:
            written.append(
                self._write(SETTLEMENTS_FILE, [s.to_dict() for s in state.settlements])
            )
        if state.explored_locations:
            written.append(self._write(LOCATIONS_FILE, list(state.explored_locations)))
        if state.inventory is not None:
            written.append(self._write(INVENTORY_FILE, state.inventory.to_dict()))

        written.append(self._write(STATE_FILE, state.to_dict()))
        self.logger.info(f"Wrote {len(written)} JSON reports to {self.output_dir}")
        return written
