"""Application configuration using Pydantic settings."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    # App Settings
    debug: bool = False
    log_level: str = "INFO"
    app_host: str = "0.0.0.0"
    app_port: int = 3000

    # ==========================================================================
    # Extraction Pipeline
    # ==========================================================================
    extraction_timeout_seconds: float = 20.0  # Wall-clock budget for one extraction
    allow_generic_domains: bool = True  # Unrecognized hosts fall through to generic extraction
    # Hosts rejected before any browser is launched (suffix match)
    blocked_domains: list[str] = ["localhost", "127.0.0.1", "0.0.0.0"]

    # ==========================================================================
    # Headless Browser
    # ==========================================================================
    browser_headless: bool = True
    browser_executable_path: str = ""  # Empty = Playwright's bundled Chromium
    browser_discover_executable: bool = False  # Probe common Chrome/Chromium install paths
    browser_default_timeout_ms: int = 30000  # Per-operation (protocol) timeout
    browser_navigation_timeout_ms: int = 10000
    browser_ready_timeout_ms: int = 5000
    browser_close_timeout_seconds: float = 5.0
    browser_scroll_pause_ms: int = 500
    browser_viewport_width: int = 1280
    browser_viewport_height: int = 800
    browser_user_agent: str = (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
    )
    # Request types aborted by route interception to speed up page load
    browser_blocked_resource_types: list[str] = ["image", "font", "media"]

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


settings = Settings()
