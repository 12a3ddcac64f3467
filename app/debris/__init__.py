"""debris - find and clean up disposable build artifacts, caches and logs."""

__version__ = "0.1.0"
