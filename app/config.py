from typing import Optional

from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    # Настройки приложения
    APP_NAME: str = "Course Enrollment API"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    API_PREFIX: str = "/api/v1"

    # Настройки базы данных
    DATABASE_URL: str = "sqlite:///./courses.db"

    # Логирование и трассировка
    LOG_LEVEL: str = "INFO"
    TRACING_ENABLED: bool = True
    SENTRY_DSN: Optional[str] = None
    SENTRY_TRACES_SAMPLE_RATE: float = 1.0
    ENVIRONMENT: str = "development"

    # Каталог для импорта/экспорта JSON-снимков
    EXPORT_DIR: str = "./db/exports"

    # Настройки CORS
    ALLOWED_ORIGINS: list = ["http://localhost:3000", "http://localhost:5173"]

    class Config:
        env_file = ".env"

settings = Settings()
