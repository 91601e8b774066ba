from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore", frozen=True)

    SITE_TITLE: str = "Dagobah"

    POSTGRES_USER: str = "dagobah"
    POSTGRES_PASSWORD: str = "dagobah_pass"
    POSTGRES_DB: str = "dagobah"
    POSTGRES_HOST: str = "db"
    POSTGRES_PORT: int = 5432

    # Takes precedence over the POSTGRES_* parts when set
    DATABASE_URL: str | None = None

    API_HOST: str = "0.0.0.0"
    API_PORT: int = 1138

    LOG_LEVEL: str = "INFO"

settings = Settings()
