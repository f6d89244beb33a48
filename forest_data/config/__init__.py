"""Configuration for the data loader."""

from .loader_config import LoaderConfig, default_n_jobs, load_config, loader_config_from

__all__ = ["LoaderConfig", "default_n_jobs", "load_config", "loader_config_from"]
