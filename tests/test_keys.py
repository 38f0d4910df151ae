"""
Tests for key generation.
"""

from loctable.core.keys import clean_path, display_path, make_key


class TestMakeKey:
    def test_hierarchy_reversed_and_joined(self):
        assert make_key("Panel", ["Label", "Row1", "Panel"]) == "panel.panel_row1_label"

    def test_deterministic(self):
        path = ["Title", "Header", "Canvas"]
        assert make_key("MainMenu", path) == make_key("MainMenu", list(path))

    def test_underscore_runs_collapse(self):
        key = make_key("Scene", ["A  B--C"])

        assert key == "scene.a_b_c"
        assert "__" not in key

    def test_separators_between_segments_collapse(self):
        # "Panel (1)/ Label" -> "Panel__1____Label" -> "Panel_1_Label"
        key = make_key("Menu", [" Label", "Panel (1)"])

        assert key == "menu.panel_1_label"

    def test_empty_path_gives_context(self):
        assert make_key("Menu", []) == "menu"
        assert make_key(".Menu.", []) == "menu"

    def test_empty_context_strips_leading_dot(self):
        assert make_key("", ["Label"]) == "label"

    def test_lowercase(self):
        assert make_key("HUD", ["ScoreText"]) == "hud.scoretext"

    def test_unicode_letters_kept(self):
        assert make_key("Meniu", ["Setări"]) == "meniu.setări"

    def test_non_decimal_numerics_replaced(self):
        assert make_key("Menu", ["Level²"]) == "menu.level_"
        assert make_key("Menu", ["Half½Size"]) == "menu.half_size"


class TestHelpers:
    def test_clean_path(self):
        assert clean_path("a/b c") == "a_b_c"
        assert clean_path("a___b") == "a_b"

    def test_display_path(self):
        assert display_path(["Label", "Row1", "Panel"]) == "Panel/Row1/Label"
        assert display_path([]) == ""
