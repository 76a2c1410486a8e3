"""Simulation building blocks for an isometric town game: random numbers, tile chunks, A* paths, unit stats, steering, timelines and pointer gestures."""

__version__ = "0.1.0"

__all__ = [
    "grid",
    "pathdata",
    "pathfind",
    "pointer",
    "prng",
    "stats",
    "steering",
    "timeline",
]