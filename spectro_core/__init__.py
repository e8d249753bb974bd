"""Conformance layer for array (multichannel) spectrometers."""
