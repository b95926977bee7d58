"""Tests for the blueprint catalog, its loader and the offline builder."""

from pathlib import Path

import orjson


def _write(path: Path, data) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(orjson.dumps(data))
    return path


class TestBlueprintCatalog:
    """Test GUID lookups."""

    def test_known_identifier(self, catalog) -> None:
        assert catalog.name("item-longsword2") == "Longsword +2"
        assert catalog.subtype_label("item-longsword2") == "Longsword"
        assert catalog.kind("item-longsword2") == "BlueprintItemWeapon"
        assert catalog.description("item-longsword2") is None

    def test_empty_identifier_is_unknown(self, catalog) -> None:
        assert catalog.name(None) == "Unknown"
        assert catalog.name("") == "Unknown"
        assert catalog.subtype_label(None) is None

    def test_unknown_identifier_gets_placeholder(self, catalog) -> None:
        from kingmaker_save.catalog import BlueprintCatalog

        name = catalog.name("0123456789abcdef0123456789abcdef")
        assert name == "Blueprint_01234567"
        assert BlueprintCatalog.is_placeholder(name)
        assert not BlueprintCatalog.is_placeholder("Longsword")
        assert not BlueprintCatalog.is_placeholder(None)

    def test_override_does_not_touch_source_tables(self) -> None:
        from kingmaker_save.catalog import BlueprintCatalog, CatalogTables

        tables = CatalogTables(names={"item-plate": "Full Plate"})
        catalog = BlueprintCatalog(tables)
        catalog.add_override("item-plate", "Mithral Full Plate")

        assert catalog.name("item-plate") == "Mithral Full Plate"
        assert tables.names == {"item-plate": "Full Plate"}

    def test_entry(self, catalog) -> None:
        entry = catalog.entry("item-plate")
        assert entry.name == "Full Plate"
        assert entry.kind == "BlueprintItemArmor"
        assert entry.description.startswith("Heavy armor")
        assert not entry.is_placeholder
        assert catalog.entry("nope").is_placeholder

    def test_override(self, catalog) -> None:
        catalog.add_override("custom-guid", "Custom Thing")
        assert catalog.name("custom-guid") == "Custom Thing"
        assert "custom-guid" in catalog
        assert catalog.mappings()["custom-guid"] == "Custom Thing"

    def test_from_file(self, catalog_file: Path) -> None:
        from kingmaker_save.catalog import BlueprintCatalog, CatalogSchema

        catalog = BlueprintCatalog.from_file(catalog_file)
        assert catalog.schema is CatalogSchema.SECTIONED_WITH_DESCRIPTIONS
        assert catalog.name("race-human") == "Human"
        assert not catalog.is_empty


class TestCatalogFileLoader:
    """Test the layout fallback chain."""

    def test_sectioned_without_descriptions(self) -> None:
        from kingmaker_save.catalog import CatalogFileLoader, CatalogSchema

        tables = CatalogFileLoader().parse({
            "Names": {"a": "Alpha"},
            "EquipmentTypes": {"a": "Dagger"},
            "BlueprintTypes": {"a": "BlueprintItemWeapon"},
        })
        assert tables.schema is CatalogSchema.SECTIONED_WITH_KINDS
        assert tables.kinds == {"a": "BlueprintItemWeapon"}
        assert tables.descriptions == {}

    def test_malformed_optional_section_falls_back(self) -> None:
        from kingmaker_save.catalog import CatalogFileLoader, CatalogSchema

        tables = CatalogFileLoader().parse({
            "Names": {"a": "Alpha"},
            "EquipmentTypes": {},
            "BlueprintTypes": ["not", "a", "table"],
        })
        assert tables.schema is CatalogSchema.SECTIONED
        assert tables.names == {"a": "Alpha"}

    def test_legacy_flat_layout(self) -> None:
        from kingmaker_save.catalog import CatalogFileLoader, CatalogSchema

        tables = CatalogFileLoader().parse({"a": "Alpha", "b": None})
        assert tables.schema is CatalogSchema.LEGACY_FLAT
        assert tables.names == {"a": "Alpha"}

    def test_unrecognized_layout_is_empty(self) -> None:
        from kingmaker_save.catalog import CatalogFileLoader, CatalogSchema

        assert CatalogFileLoader().parse([1, 2]).schema is CatalogSchema.EMPTY
        assert CatalogFileLoader().parse({"a": 3}).schema is CatalogSchema.EMPTY

    def test_missing_or_broken_file_is_empty(self, tmp_path: Path) -> None:
        from kingmaker_save.catalog import BlueprintCatalog, CatalogFileLoader

        assert CatalogFileLoader().load(tmp_path / "missing.json").names == {}
        broken = tmp_path / "broken.json"
        broken.write_text("{", encoding="utf-8")
        catalog = BlueprintCatalog.from_file(broken)
        assert catalog.is_empty
        assert catalog.name("abc") == "Blueprint_abc"


class TestCatalogBuilder:
    """Test building the catalog from a blueprint dump."""

    SWORD = "a" * 32
    PLATE = "b" * 32
    SHIELD = "c" * 32
    FEAT = "d" * 32

    def _dump(self, root: Path) -> Path:
        index = [
            "Name\tGuid\tType",
            f"Longsword_Plus2\t{self.SWORD}\tBlueprintItemWeapon",
            f"FullPlateStandard\t{self.PLATE}\tBlueprintItemArmor",
            f"HeavyShieldPlus1\t{self.SHIELD}\tBlueprintItemShield",
            f"PowerAttackFeature\t{self.FEAT}\tBlueprintFeature",
            f"DebugFeature\t{'e' * 32}\tBlueprintFeature",
            f"Short\t{'f' * 10}\tBlueprintFeature",
        ]
        (root / "Blueprints.txt").parent.mkdir(parents=True, exist_ok=True)
        (root / "Blueprints.txt").write_text("\n".join(index), encoding="utf-8")

        weapons = root / "Kingmaker.Blueprints.Items.Weapons.BlueprintItemWeapon"
        armors = root / "Kingmaker.Blueprints.Items.Armors.BlueprintItemArmor"
        shields = root / "Kingmaker.Blueprints.Items.Shields.BlueprintItemShield"
        features = root / "Kingmaker.Blueprints.Classes.BlueprintFeature"
        _write(weapons / f"Longsword_Plus2.{self.SWORD}.json", {
            "m_Type": f"Blueprint:{'1' * 32}:Longsword",
            "m_Description": " A fine blade. ",
        })
        _write(armors / f"FullPlateStandard.{self.PLATE}.json", {
            "m_Type": f"Blueprint:{'2' * 32}:FullPlateType",
        })
        _write(shields / f"HeavyShieldPlus1.{self.SHIELD}.json", {
            "m_ArmorComponent": f"Blueprint:{self.PLATE}:FullPlateStandard",
        })
        _write(features / f"PowerAttackFeature.{self.FEAT}.json", {"m_Type": None})
        return root

    def test_build(self, tmp_path: Path) -> None:
        from kingmaker_save.catalog import CatalogBuilder

        result = CatalogBuilder(self._dump(tmp_path / "dump"), max_workers=2).build()

        assert result.names == {
            self.SWORD: "Longsword Plus 2",
            self.PLATE: "Full Plate Standard",
            self.SHIELD: "Heavy Shield Plus 1",
            self.FEAT: "Power Attack Feature",
        }
        assert result.kinds[self.SWORD] == "BlueprintItemWeapon"
        assert result.kinds[self.FEAT] == "BlueprintFeature"
        assert result.subtypes == {
            self.SWORD: "Longsword",
            self.PLATE: "Full Plate",
            self.SHIELD: "Full Plate",
        }
        assert result.descriptions == {self.SWORD: "A fine blade."}

    def test_write_produces_loadable_catalog(self, tmp_path: Path) -> None:
        from kingmaker_save.catalog import BlueprintCatalog, CatalogBuilder, CatalogSchema

        output = tmp_path / "out" / "blueprint_database.json"
        CatalogBuilder(self._dump(tmp_path / "dump")).write(output)

        catalog = BlueprintCatalog.from_file(output)
        assert catalog.schema is CatalogSchema.SECTIONED_WITH_DESCRIPTIONS
        assert catalog.subtype_label(self.SWORD) == "Longsword"

    def test_normalize_blueprint_name(self) -> None:
        from kingmaker_save.catalog import normalize_blueprint_name

        assert normalize_blueprint_name("PowerAttackFeature") == "Power Attack Feature"
        assert normalize_blueprint_name("Longsword_Plus2") == "Longsword Plus 2"
        assert normalize_blueprint_name("Linzi_Companion") == "Linzi"
