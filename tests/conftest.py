"""Shared fixtures: a small catalog and a hand-made two-document save."""

import logging
from pathlib import Path
from typing import Any, Dict

import orjson
import pytest

WEAPON_TYPE = "Kingmaker.Items.ItemEntityWeapon, Assembly-CSharp"
SHIELD_TYPE = "Kingmaker.Items.ItemEntityShield, Assembly-CSharp"
ARMOR_TYPE = "Kingmaker.Items.ItemEntityArmor, Assembly-CSharp"
USABLE_TYPE = "Kingmaker.Items.ItemEntityUsable, Assembly-CSharp"
SIMPLE_TYPE = "Kingmaker.Items.ItemEntitySimple, Assembly-CSharp"
SKILL_TYPE = "Kingmaker.EntitySystem.Stats.ModifiableValueSkill, Assembly-CSharp"


def catalog_data() -> Dict[str, Any]:
    """Generation-3 catalog table used across the tests."""
    return {
        "Names": {
            "char-ekun": "Human Fighter",
            "char-harrim": "Harrim",
            "char-dummy": "Cutscene Dummy",
            "race-human": "Human",
            "race-dwarf": "Dwarf",
            "class-fighter": "Fighter",
            "class-cleric": "Cleric",
            "arch-tower": "Tower Shield Specialist",
            "feat-wf": "Weapon Focus",
            "feat-pa": "Power Attack",
            "item-longsword2": "Longsword +2",
            "item-shield": "Heavy Steel Shield",
            "item-plate": "Full Plate",
            "item-ring": "Ring of Protection +1",
            "item-potion": "Potion of Cure Light Wounds",
            "item-rattlecap": "Black Rattlecap",
            "ench-eb2": "Enhancement Bonus 2",
            "ench-flaming": "Flaming",
            "spellbook-cleric": "Cleric",
            "spell-bless": "Bless",
            "spell-cure": "Cure Light Wounds",
            "spell-sof": "Shield of Faith",
            "region-oleg": "Oleg's Trading Post",
            "region-narlmarch": "Narlmarches",
            "bld-tavern": "Tavern",
            "bld-shrine": "Shrine",
            "bld-tower": "Watchtower",
            "leader-linzi": "Linzi",
            "artisan-bokken": "Bokken",
            "loc-oleg": "Oleg's Trading Post",
            "loc-sycamore": "Old Sycamore",
        },
        "EquipmentTypes": {
            "item-longsword2": "Longsword",
            "item-shield": "Heavy Shield",
            "item-plate": "Full Plate",
        },
        "BlueprintTypes": {
            "item-longsword2": "BlueprintItemWeapon",
            "item-shield": "BlueprintItemShield",
            "item-plate": "BlueprintItemArmor",
            "item-ring": "BlueprintItemEquipmentRing",
            "item-potion": "BlueprintItemEquipmentUsable",
        },
        "Descriptions": {
            "item-plate": "Heavy armor made of shaped and interlocking metal plates.",
        },
    }


def party_data() -> Dict[str, Any]:
    """party.json with two playable units and two that must be skipped."""
    return {
        "$id": "1",
        "m_EntityData": [
            {
                "$id": "2",
                "Descriptor": {
                    "$id": "3",
                    "CustomName": "Ekun",
                    "Blueprint": "char-ekun",
                    "Alignment": {"Value": "TrueNeutral"},
                    "Progression": {
                        "$id": "4",
                        "m_Race": "race-human",
                        "Classes": [
                            {"CharacterClass": "class-fighter", "Level": 5, "Archetypes": ["arch-tower"]}
                        ],
                        "m_Selections": [
                            {
                                "Key": "sel-basic",
                                "Value": {
                                    "m_SelectionsByLevel": [
                                        {"Key": 3, "Value": ["feat-pa"]},
                                        {"Key": 1, "Value": ["feat-wf", "00000000-missing-feature"]},
                                        {"Key": 2, "Value": ["ffffffff-missing-feature"]},
                                    ]
                                },
                            }
                        ],
                        "Features": {
                            "m_Facts": [
                                {"Blueprint": "feat-wf", "Param": {"WeaponCategory": "BastardSword"}},
                                {"Blueprint": "feat-pa", "Param": None},
                            ]
                        },
                    },
                    "Stats": {
                        "Strength": {
                            "$id": "10",
                            "PermanentValue": 18,
                            "m_Dependents": [
                                {"$id": "11", "$type": SKILL_TYPE, "Type": "SkillAthletics", "PermanentValue": 7},
                            ],
                        },
                        "Dexterity": {
                            "PermanentValue": 12,
                            "m_Dependents": [
                                {"$type": SKILL_TYPE, "Type": "SkillMobility", "PermanentValue": 3},
                                {"$type": "Kingmaker.EntitySystem.Stats.ModifiableValue", "Type": "AdditionalAttackBonus", "PermanentValue": 1},
                            ],
                        },
                        "Constitution": {"PermanentValue": 14, "m_Dependents": [{"$ref": "11"}]},
                        "Wisdom": {"PermanentValue": 10},
                        "Charisma": {"PermanentValue": 8},
                    },
                    "Body": {
                        "m_HandsEquipmentSets": [
                            {
                                "PrimaryHand": {"m_Item": {"$ref": "20"}},
                                "SecondaryHand": {"m_Item": {"$ref": "21"}},
                            },
                            {"PrimaryHand": {"m_Item": None}, "SecondaryHand": {}},
                        ],
                        "m_CurrentHandsEquipmentSetIndex": 0,
                        "Armor": {"m_Item": {"$ref": "22"}},
                        "Ring1": {"m_Item": {"$ref": "23"}},
                        "Head": {"m_Item": None},
                        "m_QuickSlots": [{"m_Item": {"$ref": "24"}}, {"m_Item": None}],
                    },
                    "m_Inventory": {
                        "m_Items": [
                            {
                                "$id": "20",
                                "$type": WEAPON_TYPE,
                                "m_Blueprint": "item-longsword2",
                                "m_InventorySlotIndex": -1,
                                "m_Enchantments": {
                                    "m_Facts": [{"Blueprint": "ench-eb2"}, {"Blueprint": "ench-flaming"}]
                                },
                            },
                            {
                                "$id": "21",
                                "$type": SHIELD_TYPE,
                                "m_Blueprint": "item-shield",
                                "m_InventorySlotIndex": -1,
                                "m_Enchantments": [],
                            },
                            {
                                "$id": "22",
                                "$type": ARMOR_TYPE,
                                "m_Blueprint": "item-plate",
                                "m_InventorySlotIndex": -1,
                                "m_Enchantments": None,
                            },
                            {
                                "$id": "23",
                                "m_Blueprint": "item-ring",
                                "m_InventorySlotIndex": -1,
                                "m_Enchantments": True,
                            },
                            {
                                "$id": "24",
                                "$type": USABLE_TYPE,
                                "m_Blueprint": "item-potion",
                                "m_Count": 4,
                                "m_InventorySlotIndex": 3,
                                "m_Enchantments": "none",
                            },
                            {
                                "$id": "25",
                                "$type": SIMPLE_TYPE,
                                "m_Blueprint": "item-rattlecap",
                                "m_InventorySlotIndex": 4,
                            },
                            {
                                "$id": "26",
                                "$type": SIMPLE_TYPE,
                                "m_Blueprint": "0badf00d-not-in-catalog",
                                "m_InventorySlotIndex": 5,
                            },
                        ]
                    },
                },
            },
            {
                "$id": "30",
                "Descriptor": {
                    "$id": "31",
                    "Blueprint": "char-harrim",
                    "Alignment": "LawfulNeutral",
                    "Progression": {
                        "m_Race": "race-dwarf",
                        "Classes": [{"CharacterClass": "class-cleric", "Level": 3, "Archetypes": []}],
                    },
                    "m_Spellbooks": [
                        {
                            "Key": "spellbook-cleric",
                            "Value": {
                                "Blueprint": "spellbook-cleric",
                                "m_CasterLevelInternal": 3,
                                "m_SpontaneousSlots": [0, 0, 0],
                                "m_MemorizedSpells": [[], [{"$id": "50"}, {}, {}], [{}, {}]],
                                "m_KnownSpells": [
                                    [],
                                    [{"Blueprint": "spell-bless"}, {"Blueprint": "spell-cure"}],
                                    [],
                                ],
                                "m_SpecialSpells": [
                                    [],
                                    [{"Blueprint": "spell-sof"}, {"Blueprint": "spell-bless"}],
                                    [],
                                ],
                            },
                        }
                    ],
                },
            },
            {"$id": "40", "Descriptor": {"Blueprint": "char-dummy"}},
            {"$id": "41", "Descriptor": {"$ref": "999"}},
        ],
    }


def player_data() -> Dict[str, Any]:
    """player.json with a kingdom, two regions, a stash and map locations."""
    return {
        "$id": "1",
        "Money": 12345,
        "GameTime": "12.03:00:00",
        "SharedStash": {
            "m_Items": [
                {"$id": "2", "$type": ARMOR_TYPE, "m_Blueprint": "item-plate", "m_Count": 1},
                {"$id": "3", "$type": USABLE_TYPE, "m_Blueprint": "item-potion", "m_Count": 2},
                {"$id": "4", "m_Blueprint": "item-ring"},
            ]
        },
        "m_GlobalMap": {
            "Locations": [
                {"Key": "a", "Value": {"Blueprint": "loc-sycamore", "IsExplored": True}},
                {"Key": "b", "Value": {"Blueprint": "loc-oleg", "IsExplored": True}},
                {"Key": "c", "Value": {"Blueprint": "region-narlmarch", "IsExplored": False}},
                {"Key": "d", "Value": {"Blueprint": "1234abcd-unmapped", "IsExplored": True}},
            ]
        },
        "Kingdom": {
            "KingdomName": "Stolen Lands",
            "Alignment": "NeutralGood",
            "Unrest": "Calm",
            "BP": 150,
            "BPPerTurn": 12,
            "CurrentDay": 210,
            "Stats": {
                "m_Stats": [
                    {"Type": "Community", "Rank": 3, "Value": 65},
                    {"Type": "Military", "Rank": 2, "Value": 40},
                ]
            },
            "Leaders": [
                {"Type": "Regent", "LeaderSelection": {"m_Blueprint": "leader-linzi"}},
                {"Type": "GrandDiplomat", "LeaderSelection": None},
                {"Type": "Warden"},
                {"Type": "Spymaster"},
            ],
            "Regions": [
                {
                    "Blueprint": "region-oleg",
                    "IsClaimed": True,
                    "Settlement": {
                        "Name": "Tuskdale",
                        "Level": "Village",
                        "m_Buildings": {
                            "m_Facts": [
                                {"Blueprint": "bld-tavern", "IsFinished": True},
                                {"Blueprint": "bld-shrine", "IsFinished": True},
                                {"Blueprint": "bld-tower", "IsFinished": False},
                            ]
                        },
                    },
                    "Artisans": [
                        {
                            "Blueprint": "artisan-bokken",
                            "ProductionStartedOn": 200,
                            "ProductionEndsOn": 214,
                            "BuildingUnlocked": True,
                            "TiersUnlocked": 2,
                            "PreviousItems": ["item-potion"],
                            "CurrentProduction": [{"m_Blueprint": "item-longsword2", "m_Enchantments": []}],
                        }
                    ],
                },
                {
                    "Blueprint": "region-narlmarch",
                    "IsClaimed": False,
                    "Settlement": {"Name": "Ghost Town", "Level": "Town"},
                },
                {"Blueprint": "region-empty", "IsClaimed": True, "Settlement": None},
            ],
        },
    }


def write_json(path: Path, data: Any) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("wb") as f:
        f.write(orjson.dumps(data))
    return path


@pytest.fixture
def catalog():
    """Catalog built from the shared table."""
    from kingmaker_save.catalog import BlueprintCatalog, CatalogFileLoader

    return BlueprintCatalog(CatalogFileLoader().parse(catalog_data()))


@pytest.fixture
def catalog_file(tmp_path: Path) -> Path:
    return write_json(tmp_path / "blueprint_database.json", catalog_data())


@pytest.fixture
def party() -> Dict[str, Any]:
    return party_data()


@pytest.fixture
def player() -> Dict[str, Any]:
    return player_data()


@pytest.fixture
def save_dir(tmp_path: Path) -> Path:
    """Extracted save directory with party.json and player.json."""
    directory = tmp_path / "save"
    write_json(directory / "party.json", party_data())
    write_json(directory / "player.json", player_data())
    return directory


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    """Path for a throwaway INI configuration file."""
    return tmp_path / "kingmaker.ini"


@pytest.fixture(autouse=True)
def restore_root_logging():
    """Undo handler changes made by setup_logging during a test."""
    root_logger = logging.getLogger()
    handlers = list(root_logger.handlers)
    level = root_logger.level
    yield
    for handler in list(root_logger.handlers):
        # pytest manages its own capture handlers per test phase
        if handler in handlers or type(handler).__module__.startswith("_pytest"):
            continue
        root_logger.removeHandler(handler)
        handler.close()
    root_logger.setLevel(level)
