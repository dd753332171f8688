from pydantic_settings import BaseSettings
from typing import Optional, List

class Settings(BaseSettings):
    API_PREFIX: str = "/api"
    PROJECT_NAME: str = "Tote Art Preview Service"
    APP_TAG: str = "fiddeen"

    # Sentry settings
    SENTRY_DSN: Optional[str] = None
    ENVIRONMENT: str = "development"

    # CORS settings
    BACKEND_CORS_ORIGINS: List[str] = ["*"]

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_TIMEZONE: str = "UTC"

    # Stability AI settings
    STABILITY_API_KEY: str = ""
    STABILITY_API_URL: str = "https://api.stability.ai/v2beta/stable-image/generate/sd3"
    STABILITY_MODEL: str = "sd3.5-large"
    STABILITY_CFG_SCALE: float = 7.0
    STABILITY_ASPECT_RATIO: str = "1:1"
    STABILITY_STYLE_PRESET: str = ""  # Left empty to avoid synthetic bias

    # OpenAI settings
    OPENAI_API_KEY: str = ""
    OPENAI_IMAGE_MODEL: str = "gpt-image-1"
    OPENAI_IMAGE_SIZE: str = "1024x1024"

    # Provider routing: slot A always uses the primary, B/C use the secondary when configured
    PRIMARY_IMAGE_PROVIDER: str = "stability"
    SECONDARY_IMAGE_PROVIDER: str = ""
    IMAGE_PROVIDER_TIMEOUT_SECONDS: float = 90.0

    # AWS settings
    AWS_REGION: str = ""
    AWS_ACCESS_KEY_ID: str = ""
    AWS_SECRET_ACCESS_KEY: str = ""
    S3_BUCKET: str = ""
    S3_PUBLIC_BASE_URL: str = ""  # Optional CDN in front of the bucket
    AUDIT_TABLE_NAME: str = "fiddeen_renders"

    @property
    def aws_credentials(self) -> dict:
        if self.AWS_ACCESS_KEY_ID and self.AWS_SECRET_ACCESS_KEY:
            return {
                "aws_access_key_id": self.AWS_ACCESS_KEY_ID,
                "aws_secret_access_key": self.AWS_SECRET_ACCESS_KEY,
            }
        # Fall back to the default boto3 credential chain (instance role, profile)
        return {}

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True
        extra = "ignore"

settings = Settings()
