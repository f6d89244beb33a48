"""Dataset splitting strategies."""

from .random_splits import DataSplits, SplitConfig, split_data

__all__ = ["DataSplits", "SplitConfig", "split_data"]
