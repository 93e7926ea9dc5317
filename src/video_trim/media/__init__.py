"""Filesystem storage for staged uploads and trimmed results."""
