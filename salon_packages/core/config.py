from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    APP_NAME: str = "Salon Packages"
    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"

    STORE_PROVIDER: str = "memory"  # "memory" | "json"
    DATA_DIR: str = "./data"
    SEED_DEMO_DATA: bool = True

    CURRENCY_SYMBOL: str = "₹"
    PARALLEL_BOOKING_PROMPT: str = "Remaining services will lapse if not availed in this appointment."


settings = Settings()
