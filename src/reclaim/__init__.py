"""reclaim - find, preview and safely delete reclaimable disk space."""

__version__ = "1.1.0"
