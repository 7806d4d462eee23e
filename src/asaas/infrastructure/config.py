"""Client configuration, read from the environment (prefix ``ASAAS_``) or ``.env``."""

from __future__ import annotations

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

SANDBOX_URL = "https://api-sandbox.asaas.com/v3/"
PRODUCTION_URL = "https://api.asaas.com/v3/"


class AsaasSettings(BaseSettings):

    model_config = SettingsConfigDict(
        env_prefix="ASAAS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Environment
    sandbox: bool = True
    sandbox_token: str | None = None
    prod_token: str | None = None
    sandbox_url: str = SANDBOX_URL
    prod_url: str = PRODUCTION_URL

    # Request bodies are logged only in sandbox
    logs_enabled: bool = False

    # HTTP
    timeout_seconds: float = 30.0
    connect_timeout_seconds: float = 10.0
    max_retries: int = 3
    retry_base_delay_seconds: float = 1.0

    @model_validator(mode="after")
    def _require_active_token(self) -> AsaasSettings:
        if not (self.token or "").strip():
            variable = "ASAAS_SANDBOX_TOKEN" if self.sandbox else "ASAAS_PROD_TOKEN"
            raise ValueError(f"API token is not configured: set {variable}")
        if self.max_retries < 0:
            raise ValueError("max_retries must not be negative")
        return self

    @property
    def token(self) -> str | None:
        return self.sandbox_token if self.sandbox else self.prod_token

    @property
    def base_url(self) -> str:
        url = self.sandbox_url if self.sandbox else self.prod_url
        return url if url.endswith("/") else url + "/"

    @property
    def log_requests(self) -> bool:
        return self.sandbox and self.logs_enabled
