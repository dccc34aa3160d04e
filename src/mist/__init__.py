"""List and export macOS firmware and installer catalogs."""

__version__ = "0.1.0"
