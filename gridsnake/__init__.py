"""A grid-based snake arcade game with obstacles, bullets, shields and invincibility."""

__version__ = "0.1.0"