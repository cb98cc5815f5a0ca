"""Client configuration via environment variables."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    debit_url: str = "https://sandbox.debit.blinkpay.co.nz"
    api_path_prefix: str = "/payments/v1"
    token_path: str = "/oauth2/token"
    client_id: str = ""
    client_secret: str = ""
    timeout_seconds: float = 10.0
    retry_enabled: bool = True
    max_retries: int = 2
    retry_base_delay: float = 1.0  # Seconds before the first retry
    retry_max_delay: float = 30.0
    retry_backoff: str = "exponential"  # "exponential" or "fixed"
    log_level: str = "INFO"

    model_config = {"env_prefix": "BLINKPAY_", "env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
