"""
kingmaker-save: Pathfinder: Kingmaker save reader

Resolves the reference graph of a save, projects it onto characters,
inventory and kingdom data, and writes JSON and text reports.
"""

__version__ = "1.3.0"

__all__ = ["__version__"]
