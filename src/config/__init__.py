"""Configuration module - exports Settings, the topic catalogue, and a module-level singleton."""

from src.config.settings import Settings
from src.config.topics import LOCAL_AREAS, TOPICS, display_name, topic_storage_name

settings = Settings()

__all__ = [
    "LOCAL_AREAS",
    "Settings",
    "TOPICS",
    "display_name",
    "settings",
    "topic_storage_name",
]
