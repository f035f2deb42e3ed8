"""Material Design Bootstrap horizontal-form helpers for Django."""

__version__ = "0.1.0"
