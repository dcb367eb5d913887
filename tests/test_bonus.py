from charsheet.bonus import classify_context, dedupe_bonuses, extract_bonuses


class TestClassifyContext:
    def test_physical(self):
        assert classify_context("physical strength +3") == "phys"

    def test_magic(self):
        assert classify_context("spell power +3") == "magic"

    def test_unique(self):
        assert classify_context("special +3") == "unique"

    # A magic root anywhere in the window outranks a physical one
    def test_physical_and_magic_is_magic(self):
        assert classify_context("physical and magic +5") == "magic"

    def test_damage_is_not_magic(self):
        assert classify_context("attack damage +4") == "phys"

    def test_no_keyword(self):
        assert classify_context("recharge +2 turns") is None


class TestExtractBonuses:
    def test_phys_and_magic(self):
        text = ("Physical strength +12 while the wearer keeps to the old "
                "northern road. Magic -4.")
        bonuses = extract_bonuses(text)
        assert sorted(bonuses, key=lambda b: b["stat"]) == [
            {"value": -4, "stat": "magic"},
            {"value": 12, "stat": "phys"},
        ]

    def test_no_numbers_no_declarations(self):
        assert extract_bonuses("Cooldown: 2 turns. Duration: 1 battle.") == []

    def test_unsigned_number_falls_back_to_declaration(self):
        assert extract_bonuses("Physical strength 12") == [
            {"value": 0, "stat": "phys"}]

    def test_unicode_minus(self):
        assert extract_bonuses("Physical −5") == [
            {"value": -5, "stat": "phys"}]

    def test_en_dash_minus(self):
        assert extract_bonuses("Magic power –3") == [
            {"value": -3, "stat": "magic"}]

    def test_ambiguous_number_discarded(self):
        assert extract_bonuses("Recharge +2 turns.") == []

    def test_declarative_only(self):
        assert extract_bonuses("Grants a physical ability.") == [
            {"value": 0, "stat": "phys"}]

    def test_declarative_skipped_when_signed_found(self):
        assert extract_bonuses("Physical ability +3.") == [
            {"value": 3, "stat": "phys"}]

    def test_larger_magnitude_wins(self):
        assert extract_bonuses("Physical +3, physical -7.") == [
            {"value": -7, "stat": "phys"}]

    def test_unique(self):
        assert extract_bonuses("Unique ability +2") == [
            {"value": 2, "stat": "unique"}]

    def test_russian(self):
        assert extract_bonuses("Физ. сила +10") == [
            {"value": 10, "stat": "phys"}]

    def test_russian_declarative(self):
        assert extract_bonuses("Даёт магическую силу. Маг. способность") == [
            {"value": 0, "stat": "magic"}]

    def test_none(self):
        assert extract_bonuses(None) == []


class TestDedupeBonuses:
    def test_keeps_largest_per_stat(self):
        bonuses = [
            {"value": 0, "stat": "phys"},
            {"value": 5, "stat": "phys"},
            {"value": -2, "stat": "magic"},
        ]
        assert dedupe_bonuses(bonuses) == [
            {"value": 5, "stat": "phys"},
            {"value": -2, "stat": "magic"},
        ]

    def test_tie_keeps_first(self):
        bonuses = [{"value": -3, "stat": "phys"}, {"value": 3, "stat": "phys"}]
        assert dedupe_bonuses(bonuses) == [{"value": -3, "stat": "phys"}]

    def test_zero_is_last_resort(self):
        bonuses = [{"value": 0, "stat": "magic"}, {"value": 1, "stat": "magic"}]
        assert dedupe_bonuses(bonuses) == [{"value": 1, "stat": "magic"}]
