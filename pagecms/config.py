from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv

load_dotenv()


class Settings(BaseSettings):
    # Application settings
    app_name: str = "Page CMS"
    app_version: str = "1.0.0"
    debug: bool = False
    environment: str = "development"

    # Database settings
    database_url: str = "sqlite+aiosqlite:///./pagecms.db"

    # CORS settings
    allowed_origins: list[str] = ["http://localhost:3000", "http://localhost:3001"]

    # Front-end locations used when building preview and edit links
    frontend_urls: str = "http://localhost:3000,http://localhost:3001"
    web_base_url: str = "http://localhost:3030"
    cms_base_url: str = "http://localhost:3001"

    # Content lifecycle
    preview_ttl_minutes: int = 120
    duplicate_suffix_length: int = 3
    duplicate_suffix_attempts: int = 5

    # Notifications
    approval_email_category: str = "Approve"
    smtp_host: str = "localhost"
    smtp_port: int = 587
    smtp_user: str | None = None
    smtp_password: str | None = None
    smtp_from: str = "noreply@pagecms.local"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    @property
    def preview_base_url(self) -> str:
        """Front-end app that renders previews: the second configured URL, else the first."""
        urls = [url.strip() for url in self.frontend_urls.split(",") if url.strip()]
        if not urls:
            return ""
        return urls[1] if len(urls) > 1 else urls[0]


settings = Settings()
