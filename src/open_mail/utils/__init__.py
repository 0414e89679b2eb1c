"""Shared utilities: logging, errors, configuration, console and text helpers."""
