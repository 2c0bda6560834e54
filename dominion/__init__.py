"""Dominion card game: seeded game state, card effects, a bot and text interfaces."""

__version__ = "0.1.0"