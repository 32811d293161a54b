"""
py-polisim: procedural election and polling simulation for a political-career game.
"""

__version__ = "0.1.0"
