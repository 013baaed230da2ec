from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
    )

    # Upstream venue (public, no auth)
    QUESTION_API_URL: str = "https://auto-question.fliq.one"
    DSS_API_URL: str = "https://api-dss.fliq.one"
    MARKET_BASE_URL: str = "https://fliq.one"
    HTTP_TIMEOUT_SECONDS: float = 10.0
    PRICE_LEVEL_LIMIT: int = 60
    CATALOG_LIMIT: int = 2000

    # Polling
    POLL_INTERVAL_SECONDS: float = 2.0

    # Simulation fees (fractions, not bps)
    TAKER_FEE_RATE: float = 0.0005
    WIN_FEE_RATE: float = 0.10

    # App
    APP_NAME: str = "Order Book Mirror"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"


settings = Settings()
