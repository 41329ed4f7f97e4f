"""Dataset registry and bundled training tables."""

from . import patterns  # noqa: F401  (registers the bundled datasets)
from .registry import Dataset, available_datasets, get, get_dataset, register_dataset

__all__ = ["Dataset", "available_datasets", "get", "get_dataset", "register_dataset", "patterns"]
