# reverse_ai/data/settings.py
from pathlib import Path

from pydantic import BaseModel, Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class GoogleConfig(BaseModel):
    # Gemini Developer API
    api_key: SecretStr | None = None
    # Vertex AI backend, used when project_id is set
    project_id: str | None = None
    location: str = "global"
    service_account_creds_json: SecretStr | None = None


class TransformConfig(BaseModel):
    client: str = "google"
    model: str = "gemini-2.5-flash-image"
    request_timeout: float | None = None
    mock_delay: float = 1.0


class DefaultsConfig(BaseModel):
    """Initial parameter values for each mode."""
    age: int = 60
    style: str = "Make them wear a cyberpunk jacket with glowing blue eyes."
    countries: tuple[str, str] = ("United States", "Japan")


class LocalLoggingConfig(BaseModel):
    enabled: bool = False
    base_dir: Path = Path("generation_logs")


class WebConfig(BaseModel):
    listening_host: str = "0.0.0.0"
    listening_port: int = 8080
    max_pending_jobs: int = 100
    max_upload_mb: int = 20


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_nested_delimiter="__",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    google: GoogleConfig = Field(default_factory=GoogleConfig)
    transform: TransformConfig = Field(default_factory=TransformConfig)
    defaults: DefaultsConfig = Field(default_factory=DefaultsConfig)
    local_logging: LocalLoggingConfig = Field(default_factory=LocalLoggingConfig)
    web: WebConfig = Field(default_factory=WebConfig)

    logging_level: int = 20


settings = Settings()
