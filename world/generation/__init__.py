"""
Generation configuration.

Provides configurable settings for floor generation.
"""

from .config import GenerationConfig, load_generation_config

__all__ = ["GenerationConfig", "load_generation_config"]
