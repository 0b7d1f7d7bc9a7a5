"""Release an npm package from a clean git checkout."""

__version__ = "0.1.0"
