"""Core types, configuration and history access for semver-gen."""

__version__ = "0.1.0"
