"""Configuration management for pairwiseqa."""

from pairwiseqa.config.settings import PairwiseConfig, load_config

__all__ = [
    "PairwiseConfig",
    "load_config",
]
