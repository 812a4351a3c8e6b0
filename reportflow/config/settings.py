from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    record_store: str = "postgres"
    db_host: str = "host.docker.internal"
    db_port: int = 5432
    db_database: str = "reportflow"
    db_username: str = "reportflow"
    db_password: str = "secret"
    db_pool_max_size: int = 10

    file_download_timeout_seconds: int = 30

    pdf_engine: str = "pdfplumber"
    pdf_min_direct_chars: int = 100
    pdf_render_zoom: float = 2.0

    ocr_provider: str = "google_vision"
    google_vision_api_key: str = ""
    google_vision_base_url: str = "https://vision.googleapis.com/v1/images:annotate"
    ocr_language_hints: list[str] = ["en"]
    ocr_timeout_seconds: int = 30

    analysis_provider: str = "openai"
    analysis_temperature: float = 0.7
    analysis_call_timeout_seconds: int = 60
    analysis_openai_api_key: str = ""
    analysis_openai_model_name: str = "gpt-4o-mini"
    analysis_openai_timeout_seconds: int = 45
    analysis_openai_compatible_base_url: str = ""
    analysis_openai_compatible_api_key: str = ""
    analysis_openai_compatible_model_name: str = ""
    analysis_openai_compatible_timeout_seconds: int = 45
    analysis_gemini_api_key: str = ""
    analysis_gemini_model_name: str = "gemini-1.5-flash"
    analysis_gemini_timeout_seconds: int = 45
    analysis_openrouter_api_key: str = ""
    analysis_openrouter_model_name: str = ""
    analysis_openrouter_timeout_seconds: int = 45
    analysis_ollama_api_key: str = "ollama"
    analysis_ollama_model_name: str = ""
    analysis_ollama_timeout_seconds: int = 120

    image_provider: str = "openai"
    image_openai_api_key: str = ""
    image_model: str = "dall-e-3"
    image_size: str = "1024x1024"
    image_quality: str = "standard"
    image_style: str = "natural"
    image_timeout_seconds: int = 60

    stage_timeout_seconds: int = 120
    illustration_required: bool = True
