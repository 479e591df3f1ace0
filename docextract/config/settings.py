from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    db_host: str = "host.docker.internal"
    db_port: int = 5432
    db_database: str = "docextract"
    db_username: str = "docextract"
    db_password: str = "secret"

    max_event_attempts: int = 3
    event_poll_interval_seconds: int = 5
    event_batch_size: int = 10

    aws_region: str = "us-east-1"

    storage_backend: str = "s3"
    s3_bucket: str = ""
    files_root: str = "/app/files"

    ocr_engine: str = "textract"
    textract_sns_topic_arn: str = ""
    textract_role_arn: str = ""
    local_ocr_page_size: int = 1000

    inference_provider: str = "openai"
    inference_temperature: float = 0.1
    inference_max_tokens: int = 4096

    inference_openai_api_key: str = ""
    inference_openai_model_name: str = "gpt-4o-mini"
    inference_openai_timeout_seconds: int = 60

    inference_openai_compatible_base_url: str = ""
    inference_openai_compatible_api_key: str = ""
    inference_openai_compatible_model_name: str = ""
    inference_openai_compatible_timeout_seconds: int = 60

    inference_openrouter_api_key: str = ""
    inference_openrouter_model_name: str = ""
    inference_openrouter_timeout_seconds: int = 60

    inference_ollama_api_key: str = "ollama"
    inference_ollama_model_name: str = ""
    inference_ollama_timeout_seconds: int = 120

    reconstruction_max_input_chars: int = 100_000
