"""Config loading helpers built around OmegaConf."""

from __future__ import annotations

from typing import Any, Dict, Sequence

from omegaconf import OmegaConf

from ..config import SimConfig


def load_config_any(path: str) -> Any:
    """Load a YAML/OMEGACONF file and return the resolved Python object."""
    return OmegaConf.to_container(OmegaConf.load(path), resolve=True)


def load_config_dict(path: str, overrides: Sequence[str] = ()) -> Dict[str, Any]:
    """Load a config file, apply dotlist overrides, and guarantee a `dict` result."""
    base = OmegaConf.load(path)
    if overrides:
        base = OmegaConf.merge(base, OmegaConf.from_dotlist(list(overrides)))
    cfg = OmegaConf.to_container(base, resolve=True)
    if not isinstance(cfg, dict):
        raise TypeError(f"Expected mapping at {path}, got {type(cfg)}")
    return cfg


def load_sim_config(path: str, overrides: Sequence[str] = ()) -> SimConfig:
    """Load a YAML file straight into a validated SimConfig."""
    return SimConfig.from_dict(load_config_dict(path, overrides))
