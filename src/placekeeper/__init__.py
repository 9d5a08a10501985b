"""Placekeeper: keeps a shared pixel canvas aligned with reference templates."""

__version__ = "1.0.0"
