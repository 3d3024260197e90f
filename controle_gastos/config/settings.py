"""
Configuration Management for Controle de Gastos

Uses pydantic-settings for type-safe configuration from environment variables.

All configuration is centralized here. The only external dependency is
the Gastos API, addressed once at startup and fixed for the process lifetime.
"""

import warnings
from functools import lru_cache
from typing import Union

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class GastosApiSettings(BaseSettings):
    """Remote Gastos API configuration."""
    
    model_config = SettingsConfigDict(
        env_prefix="GASTOS_API_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )
    
    base_url: str = Field(
        default="https://localhost:7133",
        description="Base URL of the Gastos API"
    )
    verify_tls: Union[bool, str] = Field(
        default=True,
        union_mode="left_to_right",
        description="Verify TLS certificates (or path to a CA bundle)"
    )
    
    @field_validator('base_url')
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        """Strip the trailing slash and warn when the endpoint is not encrypted."""
        v = v.strip().rstrip("/")
        if not v.lower().startswith("https://"):
            warnings.warn(
                f"Gastos API base URL {v!r} is not https. "
                "The API is expected to be served over TLS."
            )
        return v


class AppSettings(BaseSettings):
    """
    Main application settings.
    
    Loads configuration from environment variables and .env file.
    """
    
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )
    
    # Environment
    app_environment: str = Field(
        default="development",
        description="Application environment"
    )
    debug_mode: bool = Field(
        default=False,
        description="Enable debug mode"
    )
    log_level: str = Field(
        default="INFO",
        pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
        description="Minimum level for structured logs"
    )
    
    # Display
    currency_symbol: str = Field(
        default="R$",
        max_length=5,
        description="Currency symbol shown before amounts"
    )


class Settings(BaseSettings):
    """
    Root settings container.
    
    Aggregates all sub-settings for easy access.
    """
    
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )
    
    @property
    def gastos_api(self) -> GastosApiSettings:
        return GastosApiSettings()
    
    @property
    def app(self) -> AppSettings:
        return AppSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).
    
    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()


def validate_all_settings() -> dict[str, bool]:
    """
    Validate all settings are properly configured.
    
    Returns a dict of {setting_name: is_valid}, with a
    "<name>_error" entry for each section that failed to load.
    """
    results = {}
    
    settings = get_settings()
    
    sections = {
        "gastos_api": lambda: settings.gastos_api,
        "app": lambda: settings.app,
    }
    for name, load in sections.items():
        try:
            load()
            results[name] = True
        except ValueError as e:
            results[name] = False
            results[f"{name}_error"] = str(e)
    
    return results
