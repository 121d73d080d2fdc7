"""
SampleWeb Backend - Application Configuration
=============================================

What:  Centralized configuration management using Pydantic Settings.
How:   Pydantic Settings reads from environment variables (or a .env file),
       validates types/ranges, and exposes a singleton `settings` object.
Who:   Imported by the view resolver, middleware, and the application factory.
When:  Loaded once at import time; never mutated afterwards.

View configuration:
    A logical view name returned by a handler is turned into a template path
    by plain concatenation:

        view_prefix + view_name + view_suffix
        "views/"    + "result"  + ".html"      → "views/result.html"

    The path is looked up relative to `templates_dir` by Jinja2.
"""

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

# Templates shipped inside the package
DEFAULT_TEMPLATES_DIR = str(Path(__file__).resolve().parent / "templates")


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings have working defaults for local development; the
    template settings are read-only once the resolver is built.
    """

    # ── Views ─────────────────────────────────────────────────────────────
    # What: Directory handed to the Jinja2 FileSystemLoader
    templates_dir: str = Field(default=DEFAULT_TEMPLATES_DIR)

    # What: Template-root part of every resolved template path
    view_prefix: str = Field(default="views/")

    # What: File suffix appended to every logical view name
    view_suffix: str = Field(default=".html")

    # ── Redirects ─────────────────────────────────────────────────────────
    # What: Status code used for "redirect:" view results (302 Found)
    redirect_status_code: int = Field(default=302, ge=300, le=308)

    # What: Path the sample /redirect handler sends clients to
    home_path: str = Field(default="/main.home")

    # ── Server ────────────────────────────────────────────────────────────
    backend_host: str = Field(default="0.0.0.0")
    backend_port: int = Field(default=8000, ge=1024, le=65535)

    # What: Verbosity of application logging
    # Valid: DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    # ── Pydantic Settings Config ──────────────────────────────────────────
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,  # TEMPLATES_DIR and templates_dir both work
    }

    def validate_template_root(self) -> None:
        """
        What:  Checks that the configured template directory exists.
        When:  Called during app startup (lifespan).
        Raises: ValueError naming the missing directory.
        """
        root = Path(self.templates_dir)
        if not root.is_dir():
            raise ValueError(
                f"Template directory '{root}' does not exist. "
                "Set TEMPLATES_DIR to a directory containing the view templates."
            )


# Singleton instance, imported throughout the application
settings = Settings()
