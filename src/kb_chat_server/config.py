from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    knowledge_dir: str = "knowledge"
    # Empty means every *.json file in knowledge_dir, sorted by name
    topic_ids: List[str] = []

    # Matching constants
    accept_threshold: float = 0.3
    fuzzy_threshold: float = 0.4
    fuzzy_limit: int = 3
    suggestion_limit: int = 5

    cors_origins: List[str] = ["*"]
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="KB_",
        env_file=".env",
        extra="ignore"
    )

settings = Settings()
