"""
Minehunt: a reverse-minesweeper puzzle engine.

The player clicks every mine on a sequence of boards; the score is
the total number of clicks.
"""
__version__ = "0.1.0"
