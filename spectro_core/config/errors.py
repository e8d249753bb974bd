"""Spectrometer configuration exception types."""

from __future__ import annotations


class SpectrometerLoaderError(Exception):
    """Human-friendly spectrometer config loader error intended for CLI output."""
