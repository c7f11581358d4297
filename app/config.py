from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    database_url: str = "postgresql://postgres:postgres@db:5432/ourhome"
    log_level: str = "INFO"

    # Auth settings
    session_secret_key: str = ""  # Required in production
    session_cookie_name: str = "ourhome_session"
    session_max_age: int = 86400 * 7  # 7 days
    session_cookie_secure: bool = False  # True in production
    password_min_length: int = 8

    # Kinopoisk movie search (disabled when the key is empty)
    kinopoisk_api_key: str = ""
    kinopoisk_base_url: str = "https://api.kinopoisk.dev"
    kinopoisk_timeout: int = 10

    class Config:
        env_file = ".env"


settings = Settings()
