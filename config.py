# SchoolDesk - configuration
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    database_url: str = "sqlite:///./schooldesk.db"
    storage_key: str = "school-data-manager"
    app_version: str = "1.0.0"
    default_theme: str = "dark"  # dark | light
    log_level: str = "INFO"
    collation_locale: str = ""  # LC_COLLATE for list sorting; "" takes it from the environment
    save_history: int = 50

    class Config:
        env_file = ".env"
        extra = "ignore"


def get_settings() -> Settings:
    return Settings()
