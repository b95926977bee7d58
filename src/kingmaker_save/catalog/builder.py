"""
Offline builder for the blueprint catalog table.

Reads a blueprint dump (Blueprints.txt plus one JSON file per blueprint,
grouped in directories named after the blueprint class) and writes the
sectioned catalog table consumed by BlueprintCatalog.
"""

import logging
import re
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import orjson

from .models import (
    NAMES_SECTION,
    SUBTYPES_SECTION,
    KINDS_SECTION,
    DESCRIPTIONS_SECTION,
    CatalogTable,
)

INDEX_FILE = "Blueprints.txt"
GUID_LENGTH = 32

WEAPON_CLASS = "BlueprintItemWeapon"
ARMOR_CLASS = "BlueprintItemArmor"
SHIELD_CLASS = "BlueprintItemShield"
ITEM_CLASS_PREFIX = "BlueprintItem"

_SPACE_BEFORE_CAPITAL = re.compile(r"(?<!^)(?=[A-Z])")
_SPACE_BEFORE_NUMBER = re.compile(r"(\d+)")
_MULTIPLE_SPACES = re.compile(r"\s+")

_DIALOG_PREFIXES = (
    "Answer",
    "Answers ",
    "Cue",
    "Check ",
    "Book ",
    "Dialogue ",
    "Banter ",
    "Sequence ",
)


def normalize_blueprint_name(name: str) -> str:
    """Turn an internal blueprint name into a readable one.

    "PowerAttackFeature" -> "Power Attack Feature",
    "Longsword_Plus2" -> "Longsword Plus 2".
    """
    if name.endswith("_Companion"):
        name = name[: -len("_Companion")]
    name = name.replace("_", " ")
    name = _SPACE_BEFORE_CAPITAL.sub(" ", name)
    name = _SPACE_BEFORE_NUMBER.sub(r" \1", name)
    name = _MULTIPLE_SPACES.sub(" ", name)
    return name.strip()


def should_skip_blueprint(name: str) -> bool:
    """Check whether a blueprint is internal game machinery rather than content."""
    if name.startswith("Test") and "Ability" not in name:
        return True
    if any(marker in name for marker in ("Internal", "Debug", "Editor")):
        return True
    if name.startswith("Temp") or "Temporary" in name:
        return True
    if name.endswith("_Old") or any(
        marker in name
        for marker in ("_Old_", "_Old1", "_Copy", "Deprecated", "Unused", "Obsolete", "UseThisOne")
    ):
        return True
    if name.endswith(("AiAction", "AiCondition", "Cooldown", "CooldownBuff")):
        return True
    if name.startswith(("NoBuff", "AlliesNoBuff")):
        return True
    if name.startswith(_DIALOG_PREFIXES):
        return True
    return len(name) <= 3


def _type_name(reference: Any) -> Optional[str]:
    """Extract TypeName from a "Blueprint:GUID:TypeName" reference string."""
    if not isinstance(reference, str):
        return None
    parts = reference.split(":")
    return parts[2] if len(parts) >= 3 and parts[2] else None


def _reference_guid(reference: Any) -> Optional[str]:
    """Extract GUID from a "Blueprint:GUID:Name" reference string."""
    if not isinstance(reference, str):
        return None
    parts = reference.split(":")
    return parts[1] if len(parts) >= 2 and parts[1] else None


def _strip_type_suffix(type_name: str) -> str:
    return type_name[: -len("Type")] if type_name.endswith("Type") else type_name


@dataclass
class BlueprintFileInfo:
    """Fields of interest read from one blueprint JSON file."""

    guid: str
    class_name: str
    type_name: Optional[str] = None
    armor_component: Optional[str] = None
    description: Optional[str] = None


@dataclass
class BuildResult:
    """The tables produced by one builder run."""

    names: CatalogTable = field(default_factory=dict)
    subtypes: CatalogTable = field(default_factory=dict)
    kinds: CatalogTable = field(default_factory=dict)
    descriptions: CatalogTable = field(default_factory=dict)

    def to_dict(self) -> Dict[str, CatalogTable]:
        return {
            NAMES_SECTION: self.names,
            SUBTYPES_SECTION: self.subtypes,
            KINDS_SECTION: self.kinds,
            DESCRIPTIONS_SECTION: self.descriptions,
        }


class CatalogBuilder:
    """Builds the catalog table from a blueprint dump directory."""

    def __init__(self, blueprints_dir: str | Path, max_workers: int = 32):
        """Initialize the builder.

        Args:
            blueprints_dir: Dump directory containing Blueprints.txt
            max_workers: Thread pool size for reading blueprint files
        """
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.blueprints_dir = Path(blueprints_dir)
        self.max_workers = max_workers

    def build(self) -> BuildResult:
        """Run all extraction steps.

        Returns:
            The built tables

        Raises:
            FileNotFoundError: If Blueprints.txt is missing
        """
        result = BuildResult()
        result.names = self.read_index(self.blueprints_dir / INDEX_FILE)
        self.logger.info(f"Extracted {len(result.names)} blueprint names")

        class_dirs = [d for d in self.blueprints_dir.iterdir() if d.is_dir()]
        for class_dir in class_dirs:
            class_name = class_dir.name.rsplit(".", 1)[-1]
            for json_file in class_dir.glob("*.json"):
                guid = self._guid_from_filename(json_file)
                if guid:
                    result.kinds[guid] = class_name
        self.logger.info(f"Extracted {len(result.kinds)} blueprint types")

        item_dirs = [
            d for d in class_dirs if d.name.rsplit(".", 1)[-1].startswith(ITEM_CLASS_PREFIX)
        ]
        infos = self._read_item_files(item_dirs)
        self._extract_subtypes(infos, result.subtypes)
        for info in infos:
            if info.description:
                result.descriptions[info.guid] = info.description
        self.logger.info(
            f"Extracted {len(result.subtypes)} equipment types and "
            f"{len(result.descriptions)} descriptions"
        )
        return result

    def write(self, output: str | Path) -> BuildResult:
        """Build the tables and write them as an indented JSON document."""
        result = self.build()
        output_path = Path(output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with output_path.open("wb") as f:
            f.write(orjson.dumps(result.to_dict(), option=orjson.OPT_INDENT_2))
        self.logger.info(f"Catalog written to {output_path.absolute()}")
        return result

    def read_index(self, index_file: Path) -> CatalogTable:
        """Read the tab-separated name/GUID index, skipping its header line."""
        names: CatalogTable = {}
        with index_file.open("r", encoding="utf-8") as f:
            lines = f.read().splitlines()

        for line in lines[1:]:
            parts = line.split("\t")
            if len(parts) < 2:
                continue
            name, guid = parts[0].strip(), parts[1].strip()
            if not name or len(guid) != GUID_LENGTH:
                continue
            if should_skip_blueprint(name):
                continue
            names[guid] = normalize_blueprint_name(name)
        return names

    @staticmethod
    def _guid_from_filename(json_file: Path) -> Optional[str]:
        # Files are named Name.GUID.json
        parts = json_file.stem.split(".")
        return parts[-1] if len(parts) >= 2 else None

    @staticmethod
    def read_blueprint_file(json_file: Path, class_name: str) -> Optional[BlueprintFileInfo]:
        """Read the fields of interest from one blueprint file."""
        guid = CatalogBuilder._guid_from_filename(json_file)
        if not guid:
            return None
        with json_file.open("rb") as f:
            data = orjson.loads(f.read())
        if not isinstance(data, dict):
            return None

        description = data.get("m_Description") or data.get("m_DescriptionText")
        return BlueprintFileInfo(
            guid=guid,
            class_name=class_name,
            type_name=_type_name(data.get("m_Type")),
            armor_component=_reference_guid(data.get("m_ArmorComponent")),
            description=description.strip() if isinstance(description, str) else None,
        )

    def _read_item_files(self, item_dirs: List[Path]) -> List[BlueprintFileInfo]:
        jobs: List[Tuple[Path, str]] = [
            (json_file, d.name.rsplit(".", 1)[-1])
            for d in item_dirs
            for json_file in d.glob("*.json")
        ]
        self.logger.info(f"Reading {len(jobs)} item blueprint files")

        infos: List[BlueprintFileInfo] = []
        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            future_to_file = {
                executor.submit(self.read_blueprint_file, json_file, class_name): json_file
                for json_file, class_name in jobs
            }
            for future in as_completed(future_to_file):
                try:
                    info = future.result()
                except (OSError, orjson.JSONDecodeError) as e:
                    self.logger.debug(f"Skipping unreadable blueprint {future_to_file[future]}: {e}")
                    continue
                if info is not None:
                    infos.append(info)
        return infos

    @staticmethod
    def _extract_subtypes(infos: List[BlueprintFileInfo], subtypes: CatalogTable) -> None:
        armor_types: Dict[str, str] = {}
        for info in infos:
            if not info.type_name:
                continue
            if info.class_name == WEAPON_CLASS:
                subtypes[info.guid] = normalize_blueprint_name(info.type_name)
            elif info.class_name == ARMOR_CLASS:
                label = normalize_blueprint_name(_strip_type_suffix(info.type_name))
                subtypes[info.guid] = label
                armor_types[info.guid] = label

        # Shields carry their type on the armor blueprint they embed
        for info in infos:
            if info.class_name == SHIELD_CLASS and info.armor_component:
                label = armor_types.get(info.armor_component)
                if label:
                    subtypes[info.guid] = label
