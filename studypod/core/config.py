# studypod/core/config.py
"""Application configuration using Pydantic."""
from pydantic_settings import BaseSettings
from typing import List, Optional

class Settings(BaseSettings):
    database_url: str

    app_version: str = '1.0.0'
    environment: str = 'development'
    log_level: str = 'info'
    allowed_origins: List[str] = ['*']

    # Gemini
    gemini_api_key: Optional[str] = None
    gemini_model: str = 'gemini-2.5-flash'
    ai_timeout_seconds: float = 30.0

    # Realtime chat
    ws_idle_timeout_seconds: float = 300.0  # 0 disables the idle check
    ws_send_timeout_seconds: float = 5.0
    default_message_page_size: int = 50

    # Recommendations
    recommendation_timeout_seconds: float = 20.0
    recommendation_default_score: int = 75

    model_config = {
        'env_file': '.env',
        'extra': 'ignore'
    }

settings = Settings()
