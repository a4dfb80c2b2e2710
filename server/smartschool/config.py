from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application configuration settings"""

    # Application
    app_name: str = "Smart School API"
    debug: bool = False
    api_version: str = "v1"
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 4000

    # CORS
    cors_origins: str = "*"

    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS origins from comma-separated string"""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    # OpenAI (empty key: oracles answer with their fallback values)
    openai_api_key: str = ""
    grading_model: str = "gpt-4o-mini"
    proctoring_model: str = "gpt-4o-mini"
    oracle_timeout_seconds: float = 20.0

    # Exams
    default_exam_duration: int = 60  # Minutes

    # Mock data
    seed_on_startup: bool = True
    mock_student_count: int = 50
    mock_seed: int = 42

    class Config:
        env_file = ".env"
        case_sensitive = False
        extra = "ignore"


# Global settings instance
settings = Settings()
