"""
Application settings and configuration

Uses pydantic-settings for type-safe configuration via environment variables.
All settings use SIMPLEDOWN_ prefix (e.g., SIMPLEDOWN_STRICT_MODE=true).

Settings can also be loaded from a .env file in the project root.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """
    Application configuration via environment variables.

    Environment variables use SIMPLEDOWN_ prefix.

    Examples:
        SIMPLEDOWN_VERBOSITY=3
        SIMPLEDOWN_STRICT_MODE=true
        SIMPLEDOWN_PYGMENTS_STYLE=monokai
    """

    model_config = SettingsConfigDict(
        env_prefix="SIMPLEDOWN_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Logging configuration
    verbosity: int = Field(
        default=0,
        description="Verbosity used by LOG() when no state is connected to the logger",
    )

    # Parser configuration
    strict_mode: bool = Field(
        default=False,
        description="Strict mode: rule table entries missing from the priority order are errors",
    )

    # Output configuration
    paragraph_class: str = Field(
        default="paragraph",
        description="CSS class of the div wrapping rendered paragraphs",
    )

    highlight_code: bool = Field(
        default=True,
        description="Syntax highlight fenced code blocks that declare a language",
    )

    pygments_style: str = Field(
        default="default",
        description="Pygments style used for highlighted code blocks",
    )

    def paragraph_openTag(self) -> str:
        """
        Opening tag for a rendered paragraph.

        Example:
            >>> settings = AppSettings()
            >>> settings.paragraph_openTag()
            '<div class="paragraph">'
        """
        return f'<div class="{self.paragraph_class}">'


# Singleton instance - import this in your code
appsettings = AppSettings()
