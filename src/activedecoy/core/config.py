"""YAML configuration loading using OmegaConf."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from omegaconf import DictConfig, OmegaConf


class ActiveDecoyConfig:
    """Loads the base YAML config and merges optional overrides.

    Any ``*.yaml`` files in a ``scenarios/`` or ``countermeasures/``
    directory next to the base file are merged on top in sorted order.
    """

    def __init__(self, config_path: str | Path = "config/default.yaml"):
        self._config_path = Path(config_path)
        self._config: DictConfig | None = None

    def load(self, validate: bool = False) -> DictConfig:
        """Load base config and merge any overrides.

        Args:
            validate: If True, validate against the Pydantic schema and
                raise ``pydantic.ValidationError`` on invalid values.
        """
        if not self._config_path.exists():
            raise FileNotFoundError(f"Config not found: {self._config_path}")

        base = OmegaConf.load(self._config_path)
        assert isinstance(base, DictConfig)

        config_dir = self._config_path.parent
        for subdir in ("countermeasures", "scenarios"):
            sub_path = config_dir / subdir
            if sub_path.is_dir():
                for yaml_file in sorted(sub_path.glob("*.yaml")):
                    base = OmegaConf.merge(base, OmegaConf.load(yaml_file))

        if validate or OmegaConf.select(
            base, "active_decoy.system.validate_config", default=False
        ):
            from activedecoy.core.config_schema import validate_config

            validate_config(OmegaConf.to_container(base, resolve=True))

        self._config = base
        return self._config

    def override(self, dotpath: str, value: Any) -> None:
        """Override a value using dot notation.

        Example: config.override("active_decoy.countermeasures.enabled", False)
        """
        if self._config is None:
            raise RuntimeError("Config not loaded yet. Call load() first.")
        OmegaConf.update(self._config, dotpath, value)

    @property
    def cfg(self) -> DictConfig:
        if self._config is None:
            raise RuntimeError("Config not loaded yet. Call load() first.")
        return self._config
