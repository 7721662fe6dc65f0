"""Ambient infrastructure: logging, configuration, events."""
