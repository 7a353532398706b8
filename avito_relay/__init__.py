"""Avito message relay service."""
