"""Configuration module -- exports Settings and load_config."""

from shelterpost.config.loader import load_config
from shelterpost.config.settings import Settings

__all__ = ["Settings", "load_config"]
