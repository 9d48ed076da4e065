"""Build-time secret loading for the native Android build."""

__version__ = "0.1.0"
