"""
Main entry point for kingmaker-save.
Usage: python -m kingmaker_save
"""

from .cli import app, main

if __name__ == "__main__":
    main()

__all__ = ["app"]
