"""End-to-end engagement scenarios against the active decoy system.

Scenario A: Notch + decoys. Aircraft flies perpendicular to the missile
    with its radar off; the first decoy inside seeker range pulls the
    missile and the aircraft survives.
Scenario B: Head-on, radar on. Both behavioral penalties apply, the
    decoys cannot win and the missile hits.
Scenario C: Kill switch. With countermeasures disabled nothing is
    launched and the missile hits.
Scenario D: Terrain masking. Decoys ejected below the terrain line are
    never visible to the seeker.
Scenario E: CLI run of the default engagement.
"""

from __future__ import annotations

import json

import pytest
from omegaconf import OmegaConf

from activedecoy.__main__ import main
from activedecoy.core.clock import SimClock
from activedecoy.sim.scenario import EngagementScenario


@pytest.fixture
def scenario_cfg(default_config):
    """Mutable copy of the ``active_decoy`` section of the default config."""
    return OmegaConf.create(OmegaConf.to_container(default_config.active_decoy, resolve=True))


def _run(cfg):
    scenario = EngagementScenario.from_config(cfg, clock=SimClock())
    return scenario, scenario.run()


# ===================================================================
# Scenario A: Notch + decoys
# ===================================================================


class TestNotchScenario:
    def test_missile_defeated(self, scenario_cfg):
        scenario, result = _run(scenario_cfg)
        assert result.defeated
        assert result.intercepted_at is None
        assert scenario.aircraft.is_alive
        assert result.min_miss_distance_m > scenario.seeker.fuze_radius_m

    def test_redirect_after_first_launch(self, scenario_cfg):
        _, result = _run(scenario_cfg)
        assert result.redirected_at is not None
        assert result.redirected_at >= 4.0
        assert result.redirected_to is not None

    def test_ammo_bookkeeping(self, scenario_cfg):
        _, result = _run(scenario_cfg)
        assert result.decoys_launched == 2
        assert result.rounds_remaining == 72 - 2
        assert result.status["launched"] == 2
        assert result.status["redirects"] == 1

    def test_seeker_left_without_target(self, scenario_cfg):
        scenario, _ = _run(scenario_cfg)
        assert scenario.seeker.target_unit_id is None
        assert scenario.seeker.lock_established is False

    def test_decoys_expire_by_end(self, scenario_cfg):
        scenario, result = _run(scenario_cfg)
        # Last launch at 8 s; 12 s lifetime plus 1 s grace ends well before 30 s
        assert result.status["live_decoys"] == 0
        assert scenario.system.decoys == []

    def test_deterministic(self, scenario_cfg):
        _, first = _run(scenario_cfg)
        _, second = _run(scenario_cfg)
        assert first.redirected_at == second.redirected_at
        assert first.min_miss_distance_m == second.min_miss_distance_m


# ===================================================================
# Scenario B: Head-on with radar on
# ===================================================================


class TestHeadOnRadarOnScenario:
    @pytest.fixture
    def head_on_cfg(self, scenario_cfg):
        OmegaConf.update(scenario_cfg, "scenario.aircraft.heading_deg", 90.0)
        OmegaConf.update(scenario_cfg, "scenario.aircraft.radar_active", True)
        return scenario_cfg

    def test_missile_not_redirected(self, head_on_cfg):
        _, result = _run(head_on_cfg)
        assert result.redirected_at is None
        assert result.status["redirects"] == 0

    def test_aircraft_hit(self, head_on_cfg):
        scenario, result = _run(head_on_cfg)
        assert result.intercepted_at is not None
        assert not scenario.aircraft.is_alive
        assert not result.defeated


# ===================================================================
# Scenario C: Kill switch
# ===================================================================


class TestKillSwitchScenario:
    def test_disabled_system_launches_nothing(self, scenario_cfg):
        OmegaConf.update(scenario_cfg, "countermeasures.enabled", False)
        _, result = _run(scenario_cfg)
        assert result.decoys_launched == 0
        assert result.rounds_remaining == 72
        assert result.redirected_at is None
        assert result.intercepted_at is not None


# ===================================================================
# Scenario D: Terrain masking
# ===================================================================


class TestTerrainMaskingScenario:
    def test_decoys_below_plateau_are_hidden(self, scenario_cfg):
        # Aircraft skims 1 m above the terrain; decoys eject 2 m below it
        OmegaConf.update(scenario_cfg, "scenario.terrain.ground_level_m", 2999.0)
        _, result = _run(scenario_cfg)
        assert result.decoys_launched == 2
        assert result.redirected_at is None
        assert result.intercepted_at is not None


# ===================================================================
# Scenario E: CLI
# ===================================================================


class TestCLI:
    def test_json_summary(self, config_path, capsys):
        code = main(["--config", str(config_path), "--json", "--log-level", "ERROR"])
        assert code == 0
        summary = json.loads(capsys.readouterr().out)
        assert summary["defeated"] is True
        assert summary["decoys_launched"] == 2

    def test_text_summary(self, config_path, capsys):
        assert main(["--config", str(config_path), "--log-level", "ERROR"]) == 0
        out = capsys.readouterr().out
        assert "Engagement summary" in out
        assert "DEFEATED" in out

    def test_disable_flag(self, config_path, capsys):
        code = main(
            ["--config", str(config_path), "--disable", "--json", "--log-level", "ERROR"]
        )
        assert code == 0
        summary = json.loads(capsys.readouterr().out)
        assert summary["decoys_launched"] == 0
        assert summary["defeated"] is False

    def test_missing_config(self, tmp_path, capsys):
        assert main(["--config", str(tmp_path / "missing.yaml")]) == 1
        assert "not found" in capsys.readouterr().err

    def test_invalid_config_rejected(self, tmp_path, capsys):
        bad = tmp_path / "bad.yaml"
        bad.write_text("active_decoy:\n  countermeasures:\n    combined_penalty: 7.0\n")
        assert main(["--config", str(bad), "--validate-config"]) == 1
        assert "validation failed" in capsys.readouterr().err
