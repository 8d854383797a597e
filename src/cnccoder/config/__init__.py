"""Defaults and persisted user settings."""
