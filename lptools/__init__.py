"""Parse, normalise and solve linear programs with the simplex method."""

__version__ = "0.1.0"
__all__ = ["model", "parsing", "solver"]