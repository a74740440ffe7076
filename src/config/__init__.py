"""
Configuration module for the issue summarizer.
"""

from .summarizer_config import SummarizerConfig, ConfigError

__all__ = [
    "SummarizerConfig",
    "ConfigError",
]
