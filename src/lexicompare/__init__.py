"""Cross-source comparison and conflict detection for legal text."""

__version__ = "0.1.0"
