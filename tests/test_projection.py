"""Tests for the whole-save projection service and character ordering."""

from pathlib import Path


def _character(name, custom_name=None):
    from kingmaker_save.projection import Character

    return Character(name=name, custom_name=custom_name)


class TestOrderCharacters:
    """Test exclusion and ordering of the character list."""

    def test_order_then_document_order(self) -> None:
        from kingmaker_save.projection import ReportOptions, order_characters

        characters = [
            _character("Valerie"),
            _character("Ekun (Human Fighter)", "Ekun"),
            _character("Linzi"),
            _character("Harrim"),
        ]
        options = ReportOptions(character_order=["harrim", "EKUN"])

        ordered = order_characters(characters, options)
        assert [c.name for c in ordered] == [
            "Harrim",
            "Ekun (Human Fighter)",
            "Valerie",
            "Linzi",
        ]

    def test_exclusion_applies_before_ordering(self) -> None:
        from kingmaker_save.projection import ReportOptions, order_characters

        characters = [_character("Valerie"), _character("Linzi"), _character("Harrim")]
        options = ReportOptions(character_order=["Linzi"], excluded_characters=["linzi", "Valerie"])

        assert [c.name for c in order_characters(characters, options)] == ["Harrim"]

    def test_unknown_and_blank_names_are_ignored(self) -> None:
        from kingmaker_save.projection import ReportOptions, order_characters

        characters = [_character("Valerie"), _character("Linzi")]
        options = ReportOptions(character_order=["Nobody", " "])

        assert [c.name for c in order_characters(characters, options)] == ["Valerie", "Linzi"]

    def test_same_named_characters_are_all_kept(self) -> None:
        from kingmaker_save.projection import ReportOptions, order_characters

        characters = [_character("Mercenary"), _character("Linzi"), _character("Mercenary")]
        ordered = order_characters(characters, ReportOptions(character_order=["Mercenary"]))

        assert [c.name for c in ordered] == ["Mercenary", "Mercenary", "Linzi"]
        assert ordered[0] is characters[0]


class TestStateProjector:
    """Test the complete projection of a save directory."""

    def test_project_full_state(self, save_dir: Path, catalog) -> None:
        from kingmaker_save.projection import StateProjector
        from kingmaker_save.save_data import SaveDataService

        state = StateProjector(SaveDataService(save_dir), catalog).project()

        assert [c.name for c in state.characters] == ["Ekun (Human Fighter)", "Harrim"]
        assert state.kingdom.name == "Stolen Lands"
        assert [s.settlement_name for s in state.settlements] == ["Tuskdale"]
        assert state.explored_locations == ["Old Sycamore", "Oleg's Trading Post"]
        assert state.inventory.personal_chest.unique_items == 3
        assert state.inventory.shared_inventory.total_items == 5

    def test_disabled_sections_stay_none(self, save_dir: Path, catalog) -> None:
        from kingmaker_save.projection import ReportOptions, StateProjector
        from kingmaker_save.save_data import SaveDataService

        options = ReportOptions(
            include_kingdom_stats=False,
            include_settlements=False,
            include_explored_locations=False,
            include_inventory=False,
        )
        state = StateProjector(SaveDataService(save_dir), catalog, options).project()

        assert set(state.to_dict()) == {"characters"}

    def test_missing_player_document(self, save_dir: Path, catalog) -> None:
        from kingmaker_save.projection import StateProjector
        from kingmaker_save.save_data import SaveDataService

        (save_dir / "player.json").unlink()
        state = StateProjector(SaveDataService(save_dir), catalog).project()

        assert state.kingdom is None
        assert state.settlements is None
        assert state.inventory.personal_chest.is_empty
        assert not state.inventory.shared_inventory.is_empty

    def test_excluded_characters(self, save_dir: Path, catalog) -> None:
        from kingmaker_save.projection import ReportOptions, StateProjector
        from kingmaker_save.save_data import SaveDataService

        options = ReportOptions(excluded_characters=["Ekun"])
        state = StateProjector(SaveDataService(save_dir), catalog, options).project()
        assert [c.name for c in state.characters] == ["Harrim"]

    def test_serialized_state_is_snake_case(self, save_dir: Path, catalog) -> None:
        from kingmaker_save.projection import StateProjector
        from kingmaker_save.save_data import SaveDataService

        data = StateProjector(SaveDataService(save_dir), catalog).project().to_dict()

        assert set(data) == {"kingdom", "characters", "settlements", "explored_locations", "inventory"}
        ekun = data["characters"][0]
        assert ekun["equipment"]["main_hand"]["enchantments"] == ["Flaming"]
        assert ekun["equipment"]["body"]["type"] == "Full Plate"
        assert "head" not in ekun["equipment"]
        assert data["kingdom"]["kingdom_days"] == 210
        assert data["inventory"]["shared_inventory"]["other"][0]["category"] == "miscellaneous"
