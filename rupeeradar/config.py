"""Configuration settings for the application."""
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings."""
    
    app_name: str = "RupeeRadar SMS API"
    debug: bool = False
    log_level: str = "INFO"
    
    # Key-value persistence
    database_path: str = "rupeeradar.db"
    storage_key: str = "rupeeradar_transactions"
    
    # LLM provider used for the confidence check and category fallback
    llm_model_id: str = "gemini-2.0-flash-001"
    google_api_key: str = ""
    openai_api_key: str = ""
    anthropic_api_key: str = ""
    enable_ai_verification: bool = True
    enable_ai_categorization: bool = True
    verification_confidence_threshold: float = 0.8
    category_confidence_threshold: float = 0.7
    
    # Inbox polling
    sms_inbox_path: str = ""
    poll_interval_seconds: float = 5.0
    inbox_batch_size: int = 20
    processed_cache_size: int = 100
    auto_start_listener: bool = False
    
    class Config:
        env_file = ".env"
        case_sensitive = False


settings = Settings()
