"""Tests for CountermeasureConfig construction from OmegaConf."""

from __future__ import annotations

import logging

import pytest
from omegaconf import OmegaConf

from activedecoy.core.types import AircraftType
from activedecoy.countermeasures.config import (
    DEFAULT_STEALTH_DIVISORS,
    CountermeasureConfig,
)


class TestCountermeasureConfig:
    def test_defaults(self):
        config = CountermeasureConfig()
        assert config.enabled is True
        assert config.combined_penalty == 0.25
        assert config.penalty_factor == pytest.approx(0.5)
        assert config.decoy.min_rcs == 0.5
        assert config.stealth_enabled is False
        assert config.stealth_divisors == DEFAULT_STEALTH_DIVISORS

    def test_penalty_factor_squares_to_combined(self):
        config = CountermeasureConfig(combined_penalty=0.09)
        assert config.penalty_factor ** 2 == pytest.approx(0.09)

    def test_none(self):
        assert CountermeasureConfig.from_omegaconf(None) == CountermeasureConfig()

    def test_from_default_yaml(self, default_config):
        config = CountermeasureConfig.from_omegaconf(default_config.active_decoy.countermeasures)
        assert config == CountermeasureConfig()

    def test_from_plain_dict(self):
        config = CountermeasureConfig.from_omegaconf(
            {"enabled": False, "decoy": {"lifetime_s": 6.0}}
        )
        assert config.enabled is False
        assert config.decoy.lifetime_s == 6.0
        assert config.decoy.rcs_multiplier == 3.0

    def test_penalty_clamped(self, caplog):
        with caplog.at_level(logging.WARNING, logger="activedecoy"):
            config = CountermeasureConfig.from_omegaconf({"combined_penalty": 2.0})
        assert config.combined_penalty == 1.0
        assert "clamping" in caplog.text

    def test_stealth_divisors_by_type_name(self):
        cfg = OmegaConf.create(
            {"stealth": {"enabled": True, "divisors": {"Medusa": 40.0, "cricket": 2.0}}}
        )
        config = CountermeasureConfig.from_omegaconf(cfg)
        assert config.stealth_enabled is True
        assert config.stealth_divisors == {
            AircraftType.MEDUSA: 40.0,
            AircraftType.CRICKET: 2.0,
        }

    def test_unknown_stealth_type_skipped(self, caplog):
        with caplog.at_level(logging.WARNING, logger="activedecoy"):
            config = CountermeasureConfig.from_omegaconf(
                {"stealth": {"divisors": {"blimp": 10.0, "ifrit": 80.0}}}
            )
        assert config.stealth_divisors == {AircraftType.IFRIT: 80.0}
        assert "blimp" in caplog.text
