from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    environment: str = "development"  # "development" | "production"
    log_level: str | None = None  # Overrides the environment default (DEBUG in dev, ERROR in prod)

    # Feedback banner lifetime
    feedback_ttl_seconds: float = 3.0

    # Conversational runtime connection. No webhook URL means no assistant is attached.
    assistant_enabled: bool = True
    assistant_webhook_url: str | None = None
    assistant_token: str | None = None
    assistant_timeout_seconds: float = 5.0

    # Action id used when relaying the calculation summary ("results" | "calculation_complete")
    results_action_id: str = "results"

    model_config = {"env_file": ".env", "extra": "ignore"}

    @property
    def is_development(self) -> bool:
        return self.environment.lower() in ("development", "dev")


settings = Settings()
