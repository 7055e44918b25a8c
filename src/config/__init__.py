"""Configuration module — exports Settings, load_config, and the genre table."""

from src.config.genre_table import GENRE_TABLE, lookup_genre
from src.config.loader import load_config
from src.config.settings import Settings

__all__ = ["GENRE_TABLE", "Settings", "load_config", "lookup_genre"]
