"""Configuration system for LendReady document intake.

This module provides Pydantic Settings-based configuration with environment
variable support and sensible defaults for requirement resolution, document
matching, verification and the intake pipeline.

Usage:
    from lendready_pipeline.config import LendReadyConfig

    # Load from environment variables and .env file
    config = LendReadyConfig()

    # Access intake settings
    print(config.intake.max_concurrency)
    print(config.verification.confidence_threshold)
"""

import logging

import structlog
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class MatchingConfig(BaseSettings):
    """Document matching settings.

    Environment Variables:
        LENDREADY_MATCHING_SUGGESTION_LIMIT: Number of suggested files to keep
    """

    model_config = SettingsConfigDict(
        env_prefix="LENDREADY_MATCHING_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    suggestion_limit: int = Field(
        default=5,
        gt=0,
        le=100,
        description="Maximum number of suggested files per requirement list",
    )


class VerificationConfig(BaseSettings):
    """Verification scoring settings.

    Environment Variables:
        LENDREADY_VERIFICATION_CONFIDENCE_THRESHOLD: Minimum confidence (0-100) for a match
    """

    model_config = SettingsConfigDict(
        env_prefix="LENDREADY_VERIFICATION_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    confidence_threshold: float = Field(
        default=30.0,
        ge=0.0,
        le=100.0,
        description="Minimum confidence for a document to count as verified",
    )


class ResolutionConfig(BaseSettings):
    """Requirement resolution settings.

    Environment Variables:
        LENDREADY_RESOLUTION_DEDUPLICATE: Remove repeated documents and schedules
    """

    model_config = SettingsConfigDict(
        env_prefix="LENDREADY_RESOLUTION_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    deduplicate: bool = Field(
        default=False,
        description="Drop repeated documents and schedules, keeping the first occurrence",
    )


class IntakeConfig(BaseSettings):
    """Intake pipeline settings.

    Environment Variables:
        LENDREADY_INTAKE_MAX_CONCURRENCY: Documents processed at the same time
        LENDREADY_INTAKE_OCR_TIMEOUT: Seconds allowed for recognizing one document
        LENDREADY_INTAKE_LEDGER_BASE_URL: Base URL for stored document links
    """

    model_config = SettingsConfigDict(
        env_prefix="LENDREADY_INTAKE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    max_concurrency: int = Field(
        default=4,
        ge=1,
        le=64,
        description="Maximum number of documents processed concurrently",
    )
    ocr_timeout: float = Field(
        default=120.0,
        gt=0,
        description="Recognition timeout per document in seconds",
    )
    ledger_base_url: str = Field(
        default="https://shield-ledger.example.com/documents",
        description="Base URL that ledger document links are built from",
    )

    @field_validator("ledger_base_url")
    @classmethod
    def validate_ledger_base_url(cls, v: str) -> str:
        """Ensure the base URL is an http(s) URL without a trailing slash."""
        v = v.strip()
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"Invalid ledger base URL: {v}. Must start with http:// or https://")
        return v.rstrip("/")


class LendReadyConfig(BaseSettings):
    """Root configuration for LendReady.

    Combines all configuration subsections and supports loading from
    environment variables and .env files.

    Environment Variables:
        LENDREADY_ENV: Environment name (development, staging, production, test)
        LENDREADY_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR)

    Example:
        # Load all configuration from environment
        config = LendReadyConfig()

        # Override specific settings
        config = LendReadyConfig(
            intake=IntakeConfig(max_concurrency=8),
            verification=VerificationConfig(confidence_threshold=50.0),
        )
    """

    model_config = SettingsConfigDict(
        env_prefix="LENDREADY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Environment settings
    env: str = Field(
        default="development",
        description="Environment name (development, staging, production)",
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )

    # Nested configuration
    matching: MatchingConfig = Field(default_factory=MatchingConfig)
    verification: VerificationConfig = Field(default_factory=VerificationConfig)
    resolution: ResolutionConfig = Field(default_factory=ResolutionConfig)
    intake: IntakeConfig = Field(default_factory=IntakeConfig)

    @field_validator("env")
    @classmethod
    def validate_env(cls, v: str) -> str:
        """Validate environment name."""
        valid_envs = {"development", "staging", "production", "test"}
        v_lower = v.lower().strip()
        if v_lower not in valid_envs:
            raise ValueError(f"Invalid environment: {v}. Must be one of: {valid_envs}")
        return v_lower

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate and normalize log level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v_upper = v.upper().strip()
        if v_upper not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of: {valid_levels}")
        return v_upper

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.env == "production"

    @property
    def is_debug(self) -> bool:
        """Check if debug logging is enabled."""
        return self.log_level == "DEBUG"


def configure_logging(config: LendReadyConfig) -> None:
    """Filter structlog output below the configured log level."""
    level = logging.getLevelName(config.log_level)
    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(level),
    )
