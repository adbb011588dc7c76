import os
from pydantic import BaseModel

class Settings(BaseModel):
    # Basic
    ENV: str = os.getenv("ENV", "dev")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # Models
    MODEL_PROVIDER: str = os.getenv("MODEL_PROVIDER", "mock")  # mock | openai

    # LLM
    OPENAI_API_KEY: str | None = os.getenv("OPENAI_API_KEY")
    OPENAI_MODEL: str = os.getenv("OPENAI_MODEL", "gpt-4.1-mini")

    # Email
    EMAIL_PROVIDER: str = os.getenv("EMAIL_PROVIDER", "mock")  # mock | resend | sendgrid
    RESEND_API_KEY: str | None = os.getenv("RESEND_API_KEY")
    RESEND_BASE_URL: str = os.getenv("RESEND_BASE_URL", "https://api.resend.com")
    SENDGRID_API_KEY: str | None = os.getenv("SENDGRID_API_KEY")
    EMAIL_FROM: str = os.getenv("EMAIL_FROM", "BizTradeHub <onboarding@resend.dev>")
    EMAIL_SUBJECT: str = os.getenv("EMAIL_SUBJECT", "Your BizTradeHub business valuation estimate")

    # Email content
    BRAND_NAME: str = os.getenv("BRAND_NAME", "BizTradeHub")
    CTA_URL: str = os.getenv("CTA_URL", "https://biztradehub.com")
    THUMBNAIL_BASE_URL: str = os.getenv(
        "THUMBNAIL_BASE_URL", "https://bth-valuation-api.vercel.app/thumbnails"
    )

    # CORS
    ALLOW_ORIGINS: str = os.getenv("ALLOW_ORIGINS", "*")

    # Metrics
    PROMETHEUS_ENABLED: bool = os.getenv("PROMETHEUS_ENABLED", "true").lower() == "true"

settings = Settings()
