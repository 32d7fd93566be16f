"""Utility helpers shared by the session and scripts."""

from .config import load_config_any, load_config_dict, load_sim_config

__all__ = [
    "load_config_any",
    "load_config_dict",
    "load_sim_config",
]
