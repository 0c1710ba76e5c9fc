"""stylekit-cli: Command line interface for stylekit."""

from __future__ import annotations

__version__ = "0.1.0"
