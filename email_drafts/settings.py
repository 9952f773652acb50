from typing import Optional

from pydantic import BaseModel
from pydantic_settings import BaseSettings


class GenerationSettings(BaseModel):
    default_greeting: str = "Dear Customer"
    default_sign_off: str = "Best regards"
    feature_bullet: str = "•"


class Settings(BaseSettings):
    TEST_BACKEND: str = "False"
    LOG_LEVEL: str = "DEBUG"
    TEST_DB_PATH: str = "test_db"
    DEFAULT_DB_DIR: str = "db"
    LOAD_TEST_DATA: bool = True
    log_path: Optional[str] = None
    generation: GenerationSettings = GenerationSettings()
