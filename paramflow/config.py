from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    # Security: Read from .env, never hardcode defaults here.
    # Optional: the core engines never talk to an LLM on their own.
    OPENAI_API_KEY: str | None = None

    # Model Configuration
    OPENAI_MODEL: str = "gpt-4o"

    # Generation Parameters
    LLM_TEMPERATURE: float = 0.0
    MAX_RETRIES: int = 2

    # Parameter specification: low temperature for more deterministic matching
    SPECIFICATION_TEMPERATURE: float = 0.1
    SPECIFICATION_USE_REASONING: bool = False

    # Loads from a .env file in the root directory
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

# Singleton instance
settings = Settings()
