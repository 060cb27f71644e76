"""
Tests for core/damage.py - magic damage, hits-to-kill and shot cost.
"""
import math

import pytest
from mage_farm.core.constants import ShotMode, shot_mode_from_string
from mage_farm.core.damage import (
    UNREACHABLE_FOR_COST,
    calculate_damage,
    calculate_hits_to_kill,
    calculate_shot_cost,
    resolve,
)
from mage_farm.core.formulas import TargetStats
from mage_farm.core.models import AttackerConfig


class TestDamage:
    """Tests for calculate_damage."""

    def test_basic_formula(self):
        """91 * sqrt(100) * 10 / 91 = 100."""
        assert calculate_damage(100, 10, 1, 91) == pytest.approx(100.0)

    def test_shot_multiplier_inside_sqrt(self):
        """Blessed shots multiply M.Atk by 4 under the sqrt, doubling damage."""
        plain = calculate_damage(100, 10, 1, 91)
        blessed = calculate_damage(100, 10, 4, 91)
        assert blessed == pytest.approx(plain * 2)

    def test_magic_defense_floored_at_one(self):
        assert calculate_damage(100, 1, 1, 0) == pytest.approx(910.0)
        assert calculate_damage(100, 1, 1, -50) == pytest.approx(910.0)

    def test_negative_inputs_give_zero(self):
        assert calculate_damage(-100, 10, 1, 91) == 0
        assert calculate_damage(100, -10, 1, 91) == 0

    def test_damage_never_negative(self):
        for matk in (-5, 0, 1, 500):
            for power in (-1, 0, 50):
                assert calculate_damage(matk, power, 2, 300) >= 0


class TestHitsToKill:
    """Tests for calculate_hits_to_kill."""

    def test_rounds_up(self):
        assert calculate_hits_to_kill(250, 100) == 3
        assert calculate_hits_to_kill(200, 100) == 2
        assert calculate_hits_to_kill(1, 100) == 1

    def test_unkillable_is_infinite_for_ranking(self):
        assert calculate_hits_to_kill(250, 0) == math.inf
        assert calculate_hits_to_kill(0, 100) == math.inf

    def test_unkillable_is_zero_for_cost(self):
        assert calculate_hits_to_kill(0, 100, unreachable=UNREACHABLE_FOR_COST) == 0
        assert calculate_hits_to_kill(250, 0, unreachable=UNREACHABLE_FOR_COST) == 0


class TestResolve:
    """Tests for resolve() against a target."""

    def test_resolve(self):
        attacker = AttackerConfig(matk=100, skill_power=10)
        result = resolve(attacker, TargetStats(hp=250, magic_defense=91, exp=0))
        assert result.damage == pytest.approx(100.0)
        assert result.hits_to_kill == 3
        assert result.killable

    def test_resolve_unkillable(self):
        attacker = AttackerConfig(matk=100, skill_power=0)
        result = resolve(attacker, TargetStats(hp=250, magic_defense=91, exp=0))
        assert result.hits_to_kill == math.inf
        assert not result.killable

    def test_breakdown_mentions_hits(self):
        attacker = AttackerConfig(matk=100, skill_power=10)
        result = resolve(attacker, TargetStats(hp=250, magic_defense=91, exp=0))
        assert "Hits to kill:     3" in result.breakdown()


class TestShotCost:
    """Tests for AttackerConfig shot handling and calculate_shot_cost."""

    def test_shot_mode_from_string(self):
        assert shot_mode_from_string("ss") == ShotMode.STANDARD
        assert shot_mode_from_string("BSS") == ShotMode.BLESSED
        assert shot_mode_from_string("bogus") == ShotMode.NONE

    def test_attacker_coerces_shot_string(self):
        attacker = AttackerConfig(shot="ss", ss_price=5)
        assert attacker.shot == ShotMode.STANDARD
        assert attacker.shot_multiplier == 2
        assert attacker.shot_price == 5

    def test_cost_uses_active_shot_price(self):
        attacker = AttackerConfig(shot=ShotMode.BLESSED, ss_price=5, bss_price=20)
        assert calculate_shot_cost(3, attacker) == 60

    def test_no_shots_cost_nothing(self):
        attacker = AttackerConfig(shot=ShotMode.NONE, ss_price=5, bss_price=20)
        assert calculate_shot_cost(3, attacker) == 0

    def test_unkillable_costs_nothing(self):
        attacker = AttackerConfig(shot=ShotMode.STANDARD, ss_price=5)
        assert calculate_shot_cost(math.inf, attacker) == 0


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
