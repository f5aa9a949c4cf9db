from __future__ import annotations


class InvalidProjectionInput(ValueError):
    """Raised when a caller violates the engine's own input contract.

    Fuzzy real-world data (unknown frequencies, missing history) never raises;
    it degrades to zero contribution instead.
    """
