import pytest

from pymeerkat.utils.inflection import RULES, pluralize, replace_last_occurrence


@pytest.mark.parametrize(
    "singular, plural",
    [
        ("User", "users"),
        ("Category", "categories"),
        ("Bus", "buses"),
        ("Box", "boxes"),
        ("Dish", "dishes"),
        ("Church", "churches"),
        ("City", "cities"),
        ("Mouse", "mice"),
        ("Leaf", "leaves"),
        ("Life", "lives"),
        ("Criterion", "criteria"),
        ("Phenomenon", "phenomena"),
        ("Thesis", "theses"),
        ("Cactus", "cacti"),
        ("Boy", "boys"),
        ("Key", "keys"),
        ("Way", "ways"),
        ("Guy", "guys"),
    ],
)
def test_pluralize_table(singular, plural):
    assert pluralize(singular).lower() == plural


class TestPluralize:
    def test_blank_input_passes_through(self):
        assert pluralize("") == ""
        assert pluralize("   ") == "   "

    def test_default_appends_s(self):
        assert pluralize("Product") == "Products"

    def test_preserves_case_of_untouched_prefix(self):
        assert pluralize("Category") == "Categories"
        assert pluralize("CATEGORY") == "CATEGORies"

    def test_matching_is_case_insensitive(self):
        assert pluralize("BOX") == "BOXes"
        assert pluralize("CACTUS") == "CACTi"

    def test_additive_rules(self):
        assert pluralize("Month") == "Months"
        assert pluralize("Photograph") == "Photographs"
        assert pluralize("Hero") == "Heroes"
        assert pluralize("Address") == "Addresses"

    def test_bus_wins_over_us(self):
        assert pluralize("Omnibus") == "Omnibuses"
        assert pluralize("Radius") == "Radii"

    def test_fe_is_preferred_over_f(self):
        assert pluralize("Knife") == "Knives"

    def test_non_before_ion(self):
        assert pluralize("Phenomenon") == "Phenomena"
        assert pluralize("Criterion") == "Criteria"

    def test_replacement_targets_rightmost_occurrence(self):
        assert pluralize("BusStatus") == "BusStati"
        assert pluralize("CityCity") == "CityCities"

    def test_rules_are_first_match(self):
        first_suffixes = RULES[0].suffixes
        assert "ey" in first_suffixes
        # "Key" would otherwise hit the -y -> -ies rule further down
        assert pluralize("Key") == "Keys"


class TestReplaceLastOccurrence:
    @pytest.mark.parametrize(
        "text, old, new, expected",
        [
            ("Hello World", "World", "Everyone", "Hello Everyone"),
            ("Banana", "a", "s", "Banans"),
            ("TestTest", "Test", "Case", "TestCase"),
            ("NoMatch", "Matchless", "Something", "NoMatch"),
        ],
    )
    def test_replace(self, text, old, new, expected):
        assert replace_last_occurrence(text, old, new) == expected

    def test_case_insensitive(self):
        assert replace_last_occurrence("FooBAR", "bar", "baz") == "Foobaz"

    def test_offsets_survive_length_changing_lowercase(self):
        # "İ".lower() is two characters long
        assert replace_last_occurrence("İCity", "y", "ies") == "İCities"
        assert replace_last_occurrence("İİbar", "BAR", "baz") == "İİbaz"


class TestNonAsciiWords:
    def test_dotted_capital_i(self):
        assert pluralize("İCity") == "İCities"
        assert pluralize("İsland") == "İslands"
