"""
Application settings and configuration

Uses pydantic-settings for type-safe configuration via environment variables.
All settings use DOCDOWN_ prefix (e.g., DOCDOWN_FENCE_LANGUAGE=go).

Settings can also be loaded from a .env file in the project root.
"""

from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """
    Application configuration via environment variables.

    Environment variables use DOCDOWN_ prefix.

    Examples:
        DOCDOWN_TAB_WIDTH=8
        DOCDOWN_ENTRY_POINT=main
        DOCDOWN_CODE_KEYWORDS='["interface", "struct", "chan"]'
    """

    model_config = SettingsConfigDict(
        env_prefix="DOCDOWN_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Markdown configuration
    code_indent: str = Field(
        default="    ",
        description="Prefix that turns a line into part of a Markdown indented code block",
    )

    code_keywords: List[str] = Field(
        default_factory=lambda: ["interface", "struct"],
        description="Language keywords wrapped as inline code when they appear in prose",
    )

    # Example printing configuration
    tab_width: int = Field(
        default=4,
        description="Width of one indentation level in printed example code",
    )

    use_spaces: bool = Field(
        default=True,
        description="Indent printed example code with spaces instead of tabs",
    )

    entry_point: str = Field(
        default="main",
        description="Name of the function that is the entry point of a runnable program example",
    )

    # README configuration
    fence_language: str = Field(
        default="go",
        description="Info string of fenced example code blocks",
    )

    godoc_url: str = Field(
        default="https://godoc.org",
        description="Base URL of the package documentation badge and link",
    )

    def indentUnit_get(self) -> str:
        """
        Return the string used for one level of code indentation.

        Example:
            >>> settings = AppSettings()
            >>> settings.indentUnit_get()
            '    '
        """
        return " " * self.tab_width if self.use_spaces else "\t"


# Singleton instance - import this in your code
appsettings = AppSettings()
