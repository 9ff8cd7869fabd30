"""Framework top contributors: ranked GitHub contributor lists per repository."""

__version__ = "1.0.0"
