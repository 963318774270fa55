# plugins/__init__.py
"""Command modules loaded at boot by shellkit.interface.loader."""
