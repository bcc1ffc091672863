from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    APP_NAME: str = "Restaurant Booking Voice Agent API"
    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: list[str] = ["*"]

    WEATHER_PROVIDER: str = "openweather"  # "openweather" | "mock"
    WEATHER_API_KEY: str | None = None
    WEATHER_API_BASE_URL: str = "https://api.openweathermap.org/data/2.5"
    WEATHER_TIMEOUT_SECONDS: float = 10.0

    RESTAURANT_TIMEZONE: str = "UTC"

    STORE_PROVIDER: str = "json"  # "json" | "memory"
    BOOKINGS_DATA_DIR: str = "./data"

    PROMPT_DELAY_SECONDS: float = 0.3
    SPEECH_LANGUAGE: str = "en-IN"


settings = Settings()
