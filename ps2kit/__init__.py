"""Read and write PlayStation 2 save icons and icon.sys metadata, and size save folders."""

__version__ = "0.1.0"