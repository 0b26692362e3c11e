"""
Configuration management for the payroll engine.
"""

from decimal import Decimal
from typing import Dict, Optional

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class PayrollConfig(BaseSettings):
    """Configuration settings for the payroll engine.

    The log level is read by ``LoggingConfig.from_env`` (``LOG_LEVEL``).
    """

    # Overtime rules (company settings)
    weekly_overtime_threshold: Decimal = Field(
        default=Decimal("40"), alias="WEEKLY_OVERTIME_THRESHOLD"
    )
    overtime_multiplier: Decimal = Field(
        default=Decimal("1.5"), alias="OVERTIME_MULTIPLIER"
    )
    holiday_multiplier: Decimal = Field(
        default=Decimal("2.0"), alias="HOLIDAY_MULTIPLIER"
    )

    # Application Configuration
    debug: bool = Field(default=False, alias="DEBUG")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        validate_default=True,
        extra="ignore",
    )

    @field_validator("weekly_overtime_threshold")
    @classmethod
    def validate_threshold(cls, v):
        """Ensure the weekly threshold is a positive number of hours."""
        if not v.is_finite() or v <= 0:
            raise ValueError("Weekly overtime threshold must be a positive number")
        return v

    def get_overtime_rules(
        self,
        weekly_threshold: Optional[Decimal] = None,
        overtime_multiplier: Optional[Decimal] = None,
        holiday_multiplier: Optional[Decimal] = None,
    ) -> Dict[str, Decimal]:
        """Get the overtime rules as keyword arguments for the calculators.

        Args:
            weekly_threshold: Override for the configured threshold
            overtime_multiplier: Override for the configured overtime factor
            holiday_multiplier: Override for the configured holiday factor

        Returns:
            Dictionary with ``weekly_threshold``, ``overtime_multiplier`` and
            ``holiday_multiplier``; overrides left as None use the settings
        """
        return {
            "weekly_threshold": (
                self.weekly_overtime_threshold
                if weekly_threshold is None
                else weekly_threshold
            ),
            "overtime_multiplier": (
                self.overtime_multiplier
                if overtime_multiplier is None
                else overtime_multiplier
            ),
            "holiday_multiplier": (
                self.holiday_multiplier
                if holiday_multiplier is None
                else holiday_multiplier
            ),
        }


def load_config(env_file: Optional[str] = None) -> PayrollConfig:
    """Load configuration from environment variables and .env file."""
    if env_file:
        load_dotenv(env_file)
    else:
        load_dotenv()

    return PayrollConfig()


# Global configuration instance
_config: Optional[PayrollConfig] = None


def get_config() -> PayrollConfig:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reload_config(env_file: Optional[str] = None) -> PayrollConfig:
    """Reload configuration (useful for testing)."""
    global _config
    _config = load_config(env_file)
    return _config
