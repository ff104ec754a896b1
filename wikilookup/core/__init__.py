"""Core configuration, errors and data models."""
