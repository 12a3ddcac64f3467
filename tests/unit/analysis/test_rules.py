"""Unit tests for rule tables and safety inference."""

import pytest
from debris.analysis import rules
from debris.analysis.models import SafetyTier


class TestSafetyFor:
    """Tests for safety_for function."""

    @pytest.mark.parametrize("name", ["node_modules", "build", "__pycache__", "DerivedData"])
    def test_high(self, name: str) -> None:
        assert rules.safety_for(name) == SafetyTier.HIGH

    @pytest.mark.parametrize("name", ["*.log files", "*.tmp files", "*.cache files", ".DS_Store"])
    def test_medium(self, name: str) -> None:
        assert rules.safety_for(name) == SafetyTier.MEDIUM

    @pytest.mark.parametrize("name", ["*.zip files", "vendor", ".next", "Other temporary files"])
    def test_low(self, name: str) -> None:
        assert rules.safety_for(name) == SafetyTier.LOW

    def test_high_checked_before_medium(self) -> None:
        """A name containing both a high and a medium literal is High."""
        assert rules.safety_for("build.log") == SafetyTier.HIGH


class TestReasons:
    """Tests for rationale strings and group labels."""

    def test_one_reason_per_tier(self) -> None:
        assert {rules.reason_for(t) for t in SafetyTier} == set(rules.SAFETY_REASONS.values())

    def test_extension_group_name(self) -> None:
        assert rules.extension_group_name(".gz") == "*.gz files"
