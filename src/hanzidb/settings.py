from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="HANZI_",
    )

    # dev: files next to the project, resource: files shipped inside the app bundle
    runtime: Literal["dev", "resource"] = "dev"
    project_root: Path = Field(default_factory=Path.cwd)
    resource_dir: Path | None = None

    db_name: str = "hanzi.db"
    data_dir: str = "data"
    hsk_file: str = "hsk_levels.csv"
    dictionary_file: str = "dictionary.txt"
    metadata_file: str = "metadata.json"
    backup_dir: str = "backups"

    sql_echo: bool = False
    log_level: str = "INFO"


settings = Settings()
