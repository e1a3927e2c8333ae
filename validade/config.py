from __future__ import annotations
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from typing import List
from dotenv import load_dotenv
load_dotenv()  # populates os.environ from .env

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore", populate_by_name=True)

    # Storage
    data_dir: str = Field("data", validation_alias="DATA_DIR")
    inventory_file: str = Field("data/inventory.json", validation_alias="INVENTORY_FILE")
    events_file: str = Field("data/inventory_log.jsonl", validation_alias="EVENTS_FILE")

    # Report hand-off
    report_file: str = Field("data/report.txt", validation_alias="REPORT_FILE")
    report_placeholder: str = Field("unknown", validation_alias="REPORT_PLACEHOLDER")

    log_level: str = Field("INFO", validation_alias="LOG_LEVEL")

    # CORS (narrow it down in .env via CORS_ALLOW_ORIGINS)
    cors_allow_origins: List[str] = Field(
        default_factory=lambda: ["http://127.0.0.1:8001"],
        validation_alias="CORS_ALLOW_ORIGINS",
    )
