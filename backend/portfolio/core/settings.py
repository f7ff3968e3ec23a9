# portfolio/core/settings.py
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from typing import Optional

class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
        frozen=True,
        populate_by_name=True,
    )

    api_title: str = Field(default="Portfolio API", alias="API_TITLE")
    cors_origins: str = Field(default="http://localhost:3000", alias="CORS_ORIGINS")

    # Mail relay account. Without a password nothing is actually sent.
    email_user: Optional[str] = Field(default=None, alias="EMAIL_USER")
    email_pass: Optional[str] = Field(default=None, alias="EMAIL_PASS")

    # Where notifications go; falls back to the relay account itself
    contact_recipient: Optional[str] = Field(default=None, alias="CONTACT_RECIPIENT")
    mail_from_name: str = Field(default="Portfolio Contact Form", alias="MAIL_FROM_NAME")

    smtp_host: str = Field(default="smtp.gmail.com", alias="SMTP_HOST")
    smtp_port: int = Field(default=465, alias="SMTP_PORT")
    smtp_timeout: float = Field(default=10.0, alias="SMTP_TIMEOUT")

    @property
    def delivery_enabled(self) -> bool:
        return bool(self.email_pass)

    @property
    def notification_recipient(self) -> Optional[str]:
        return self.contact_recipient or self.email_user

settings = Settings()

def get_settings() -> Settings:
    return settings
