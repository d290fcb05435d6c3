from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 5000

    cookie_secret: str = ""
    cookie_secure: bool = False
    entitlement_cookie_max_age_seconds: int = 60 * 60 * 24 * 365
    premium_cookie_name: str = "kb_premium"
    usage_cookie_name: str = "kb_used"

    free_document_limit: int = 3
    usage_count_ceiling: int = 999
    max_text_chars: int = 60_000
    max_upload_bytes: int = 20 * 1024 * 1024

    rate_limit_window_seconds: float = 60.0
    rate_limit_max_requests: int = 12
    rate_limit_client_id_chars: int = 40

    pdf_engine: str = "pdfplumber"
    pdf_min_text_chars: int = 80
    pdf_max_ocr_pages: int = 5
    pdf_render_scale: float = 2.0
    pdf_render_max_pixels: int = 12_000_000
    pdf_render_budget_seconds: float = 20.0

    ocr_languages: str = "deu+eng"
    ocr_page_segmentation_mode: int = 6
    ocr_timeout_seconds: int = 30
    image_max_dimension: int = 1800

    simplification_provider: str = "groq"
    simplification_api_key: str = ""
    simplification_model_name: str = "llama-3.3-70b-versatile"
    simplification_base_url: str = ""
    simplification_timeout_seconds: int = 60
    simplification_temperature: float = 0.2
    simplification_max_retries: int = 1

    stripe_secret_key: str = ""
    stripe_price_id: str = ""
    app_url: str = "http://localhost:5000"

    basic_auth_user: str = ""
    basic_auth_pass: str = ""
