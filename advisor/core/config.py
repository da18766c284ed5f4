from pydantic_settings import BaseSettings, SettingsConfigDict

from advisor.application.utils.prompts import DEFAULT_SYSTEM_INSTRUCTION


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    OPENAI_API_KEY: str | None = None
    OPENAI_MODEL: str = "gpt-4o-mini"
    OPENAI_TEMPERATURE: float = 0.2
    OPENAI_MAX_TOKENS: int = 1400

    COMPLETION_PROVIDER: str = "auto"  # "auto", "worker", "openai", "mock"
    COMPLETION_ENDPOINT: str | None = None
    COMPLETION_TIMEOUT_SECONDS: float = 30.0

    CATALOG_PATH: str = "./data/products.json"
    CATALOG_URL: str | None = None
    CATALOG_TIMEOUT_SECONDS: float = 10.0

    STORE_PROVIDER: str = "json"  # "json", "memory"
    STORE_DATA_DIR: str = "./data/sessions"
    SELECTION_STORAGE_KEY: str = "selectedProducts"

    SYSTEM_INSTRUCTION: str = DEFAULT_SYSTEM_INSTRUCTION
    TOOLTIP_GRACE_SECONDS: float = 0.2
    MAX_SESSIONS: int = 256

    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"


settings = Settings()
