"""Filesystem and validation helpers."""
