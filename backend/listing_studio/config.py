from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    app_name: str = "AI Listing Studio"
    debug: bool = False
    api_prefix: str = "/api/v1"
    log_level: str = "INFO"

    database_url: str = "sqlite:///./listing_studio.db"

    anthropic_api_key: str = ""
    anthropic_model: str = "claude-sonnet-4-5-20250929"
    anthropic_api_url: str = "https://api.anthropic.com/v1/messages"
    anthropic_version: str = "2023-06-01"
    # Applied only when the client builds its own httpx.AsyncClient
    anthropic_timeout_seconds: float = 120.0

    # Agent contact block used in calls to action and email sign-offs
    agent_name: str = ""
    agent_phone: str = ""
    agent_email: str = ""
    brokerage_name: str = ""

    cors_origins: str = "http://localhost:5173"

    model_config = {"env_file": ".env"}


settings = Settings()
