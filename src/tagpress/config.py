"""Application configuration."""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from tagpress.core.models import SiteMetadata


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    content_dir: Path = Path("content/posts")
    output_dir: Path = Path("public")
    words_per_minute: int = Field(default=200, ge=1)
    query_limit: int = Field(default=2000, ge=1)
    debug: bool = False
    log_level: str = "INFO"

    site_title: str = "Alisa Frunza"
    site_subtitle: str = "software developer"
    site_description: str = "My trivial thoughts. Some code examples. Ruby. Rails. Dev."
    site_author: str = "@alisafrunza"
    site_url: str = "https://www.frunza.me"

    model_config = SettingsConfigDict(
        env_prefix="TAGPRESS_",
        env_file=".env",
        env_file_encoding="utf-8",
    )

    def site_metadata(self) -> SiteMetadata:
        """Build the read-only site metadata handed to renderers."""
        return SiteMetadata(
            title=self.site_title,
            subtitle=self.site_subtitle,
            description=self.site_description,
            author=self.site_author,
            site_url=self.site_url,
        )


settings = Settings()
