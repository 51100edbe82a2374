"""Configuration module: exports Settings, load_config, and the prompt store."""

from winescribe.config.loader import load_config, load_pipeline_config
from winescribe.config.settings import Settings

__all__ = ["Settings", "load_config", "load_pipeline_config"]
