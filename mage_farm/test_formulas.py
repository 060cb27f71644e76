"""
Unit tests for core/formulas.py - bonus tables, level modifier, monster stat formulas
and skill classification.
"""
import math

import pytest
from mage_farm.core.constants import (
    CON_COMPUTE,
    DEX_COMPUTE,
    INT_COMPUTE,
    MEN_COMPUTE,
    STR_COMPUTE,
    WIT_COMPUTE,
)
from mage_farm.core.formulas import (
    CON_BONUS,
    DEX_BONUS,
    INT_BONUS,
    MEN_BONUS,
    SQRT_CON_BONUS,
    SQRT_MEN_BONUS,
    STR_BONUS,
    WIT_BONUS,
    build_bonus_table,
    build_monster_profile,
    calc_accuracy,
    calc_evasion,
    calc_hp_regen,
    calc_matk_speed,
    calc_mp_regen,
    calc_mdef,
    calc_pdef,
    calc_run_speed,
    calc_walk_speed,
    derive_target_stats,
    get_level_mod,
    get_monster_exp,
    get_monster_hp_rate,
    get_monster_hp_rate_value,
    get_monster_strengths,
    get_monster_weaknesses,
    get_regenerate_period,
    lookup_bonus,
    round_half_up,
)
from mage_farm.core.models import MonsterStatBlock, SkillRef


ALL_TABLES = [
    (STR_BONUS, STR_COMPUTE),
    (INT_BONUS, INT_COMPUTE),
    (DEX_BONUS, DEX_COMPUTE),
    (WIT_BONUS, WIT_COMPUTE),
    (CON_BONUS, CON_COMPUTE),
    (MEN_BONUS, MEN_COMPUTE),
]


class TestBonusTables:
    """Tests for the precomputed attribute bonus tables."""

    @pytest.mark.parametrize("table,compute", ALL_TABLES)
    def test_table_has_one_entry_per_attribute_value(self, table, compute):
        assert len(table) == 100

    @pytest.mark.parametrize("table,compute", ALL_TABLES)
    def test_table_matches_rounding_formula(self, table, compute):
        """Every entry is floor(base^(i-shift)*100+0.5)/100."""
        base, shift = compute
        for i, value in enumerate(table):
            assert value == math.floor(base ** (i - shift) * 100 + 0.5) / 100

    @pytest.mark.parametrize("table,compute", ALL_TABLES)
    def test_table_is_monotonic(self, table, compute):
        """All bases are > 1, so bonuses never decrease with the attribute."""
        assert all(a <= b for a, b in zip(table, table[1:]))

    def test_decreasing_base_gives_decreasing_table(self):
        table = build_bonus_table((0.98, 10))
        assert all(a >= b for a, b in zip(table, table[1:]))

    def test_known_values(self):
        """At i == shift the bonus is exactly 1.0."""
        assert WIT_BONUS[20] == 1.0
        assert DEX_BONUS[19] == 1.0

    def test_lookup_in_range(self):
        assert lookup_bonus(STR_BONUS, 40) == STR_BONUS[40]

    def test_lookup_out_of_range_falls_back_to_index_zero(self):
        assert lookup_bonus(STR_BONUS, 100) == STR_BONUS[0]
        assert lookup_bonus(STR_BONUS, -1) == STR_BONUS[0]
        assert lookup_bonus(STR_BONUS, 2.5) == STR_BONUS[0]
        assert lookup_bonus(STR_BONUS, None) == STR_BONUS[0]


class TestLevelModAndRounding:
    """Tests for level modifier and rounding helpers."""

    def test_level_mod(self):
        assert get_level_mod(11) == 1.0
        assert get_level_mod(1) == pytest.approx(0.90)
        assert get_level_mod(80) == pytest.approx(1.69)

    def test_round_half_up(self):
        assert round_half_up(2.5) == 3
        assert round_half_up(3.5) == 4
        assert round_half_up(2.49) == 2
        assert round_half_up(-2.5) == -2

    def test_regenerate_period(self):
        assert get_regenerate_period() == 3000
        assert get_regenerate_period(is_door=True) == 300000

    def test_hp_regen_floored_at_one(self):
        assert calc_hp_regen(0, 1.0) == 1.0

    def test_mp_regen(self):
        """MEN 0 bonus is 1.00, so regen is init * levelMod."""
        assert calc_mp_regen(30, 0, 1.0) == pytest.approx(30.0)
        assert calc_mp_regen(0.5, 0, 1.0) == 1.0

    def test_sqrt_tables(self):
        assert SQRT_MEN_BONUS[0] == 1.0
        assert SQRT_CON_BONUS[50] == pytest.approx(math.sqrt(CON_BONUS[50]))


class TestMonsterFormulas:
    """Tests for derived monster stats."""

    def test_pdef(self):
        monster = MonsterStatBlock(id="1", name="Wolf", level=11, base_defend=100)
        assert calc_pdef(monster) == 100

    def test_mdef(self):
        """MEN 0 bonus is 1.00, level 11 modifier is 1.0."""
        monster = MonsterStatBlock(id="1", name="Wolf", level=11, men=0, base_magic_defend=50)
        assert MEN_BONUS[0] == 1.0
        assert calc_mdef(monster) == 50

    def test_matk_speed_uses_fixed_factor(self):
        monster = MonsterStatBlock(id="1", name="Wolf", wit=20)
        assert calc_matk_speed(monster) == 333

    def test_evasion_adds_level_modifier_not_level(self):
        """Evasion = sqrt(25)*6 + levelMod(50) = 30 + 1.39."""
        monster = MonsterStatBlock(id="1", name="Orc", level=50, dex=25)
        assert calc_evasion(monster) == 31

    def test_accuracy_adds_raw_level(self):
        """Accuracy = sqrt(25)*6 + 50 + 3."""
        monster = MonsterStatBlock(id="1", name="Orc", level=50, dex=25, physical_hit_modify=3)
        assert calc_accuracy(monster) == 83

    def test_walk_and_run_speed(self):
        monster = MonsterStatBlock(id="1", name="Orc", dex=19, ground_low="80;0", ground_high="160.5;2")
        assert calc_walk_speed(monster) == 80
        assert calc_run_speed(monster) == 161

    def test_speed_with_missing_descriptor_is_zero(self):
        monster = MonsterStatBlock(id="1", name="Orc", dex=19, ground_low="", ground_high="fast;1")
        assert calc_walk_speed(monster) == 0
        assert calc_run_speed(monster) == 0

    def test_monster_exp(self):
        monster = MonsterStatBlock(id="1", name="Orc", level=10, acquire_exp_rate=2.5)
        assert get_monster_exp(monster) == 250

    def test_profile_builds_every_stat(self):
        monster = MonsterStatBlock(id="1", name="Orc", level=11, dex=19, wit=20, base_defend=100)
        profile = build_monster_profile(monster)
        assert profile.physical_defense == 100
        assert profile.cast_speed == 333
        assert profile.hp_rate == -1
        assert profile.hp_max_bonus == CON_BONUS[0]
        assert profile.mp_max_bonus == MEN_BONUS[0] == 1.0

    def test_profile_max_hp_mp_bonus_follow_attributes(self):
        profile = build_monster_profile(MonsterStatBlock(id="1", name="Orc", con=50, men=40))
        assert profile.hp_max_bonus == CON_BONUS[50]
        assert profile.mp_max_bonus == MEN_BONUS[40]


class TestTargetStats:
    """Tests for derive_target_stats."""

    def test_catalog_values_win(self):
        monster = MonsterStatBlock(id="1", name="Orc", level=11, base_magic_defend=50,
                                   hp=500, magic_defense=77, exp=1234)
        target = derive_target_stats(monster)
        assert target.hp == 500
        assert target.magic_defense == 77
        assert target.exp == 1234

    def test_formula_fallback(self):
        monster = MonsterStatBlock(id="1", name="Orc", level=10, base_magic_defend=50,
                                   acquire_exp_rate=2.5, hp=500)
        target = derive_target_stats(monster)
        assert target.magic_defense == calc_mdef(monster)
        assert target.exp == 250


class TestSkillClassification:
    """Tests for HP-rate, strength and weakness skills."""

    def test_hp_rate_keeps_last_match(self):
        monster = MonsterStatBlock(id="1", name="Orc", skills=(
            SkillRef(4304, 1), SkillRef(1000, 1), SkillRef(4408, 12),
        ))
        skill = get_monster_hp_rate(monster)
        assert skill == SkillRef(4408, 12)
        assert get_monster_hp_rate_value(skill) == 4

    def test_hp_rate_later_fixed_skill_overrides(self):
        monster = MonsterStatBlock(id="1", name="Orc", skills=(SkillRef(4408, 12), SkillRef(4304, 1)))
        assert get_monster_hp_rate_value(get_monster_hp_rate(monster)) == 3

    def test_hp_rate_none(self):
        monster = MonsterStatBlock(id="1", name="Orc", skills=(SkillRef(1000, 1),))
        assert get_monster_hp_rate(monster) is None

    def test_hp_rate_values(self):
        assert get_monster_hp_rate_value(SkillRef(4311, 1)) == 0.5
        assert get_monster_hp_rate_value(SkillRef(4310, 1)) == 9
        assert get_monster_hp_rate_value(SkillRef(4408, 8)) == 0.25
        assert get_monster_hp_rate_value(SkillRef(4408, 20)) == 12

    def test_hp_rate_unmapped_is_sentinel(self):
        assert get_monster_hp_rate_value(SkillRef(4408, 3)) == -1
        assert get_monster_hp_rate_value(SkillRef(1234, 1)) == -1

    def test_strengths_and_weaknesses(self):
        monster = MonsterStatBlock(id="1", name="Orc", skills=(
            SkillRef(4009, 1), SkillRef(4274, 2), SkillRef(1234, 1), SkillRef(5663, 1),
        ))
        assert get_monster_strengths(monster) == [SkillRef(4009, 1), SkillRef(5663, 1)]
        assert get_monster_weaknesses(monster) == [SkillRef(4274, 2)]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
