"""A small dungeon adventure game with combat, a boss fight and leaderboards."""

__version__ = "1.0.0"