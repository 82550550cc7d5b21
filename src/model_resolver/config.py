"""
Configuration Management for Model Resolver
Uses Pydantic for validation and type safety
"""
from __future__ import annotations

import os
from enum import Enum
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator


class TargetLanguage(str, Enum):
    """Languages whose identifier rules decide what counts as a reserved alias"""
    CSHARP = "csharp"
    PYTHON = "python"


class LogLevel(str, Enum):
    """Log levels"""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class ResolverConfig(BaseModel):
    """Name resolution and inference configuration"""
    strip_characters: List[str] = Field(
        default_factory=lambda: ["$", "(", ")", "（", "）", " ", "　"]
    )
    table_prefixes: List[str] = Field(default_factory=lambda: ["tbl", "table"])
    reserved_names: List[str] = Field(default_factory=lambda: ["item"])
    target_language: TargetLanguage = TargetLanguage.CSHARP
    overwrite_aliases: bool = False
    fill_display_names: bool = True

    @field_validator('strip_characters', 'table_prefixes', 'reserved_names')
    @classmethod
    def drop_empty_entries(cls, v: List[str]) -> List[str]:
        """Empty entries would match everywhere"""
        return [item for item in v if item]

    model_config = {"use_enum_values": True}


class SystemConfig(BaseModel):
    """Main system configuration"""
    resolver: ResolverConfig = Field(default_factory=ResolverConfig)
    log_level: LogLevel = LogLevel.INFO
    json_logs: bool = False
    metrics_enabled: bool = True

    @classmethod
    def from_env(cls, env_file: Optional[str] = None) -> "SystemConfig":
        """Create configuration from environment variables (and an optional .env file)"""
        load_dotenv(env_file)

        resolver_options = {
            "target_language": TargetLanguage(
                os.getenv("MODEL_RESOLVER_TARGET_LANGUAGE", TargetLanguage.CSHARP.value).lower()
            ),
            "overwrite_aliases": os.getenv("MODEL_RESOLVER_OVERWRITE_ALIASES", "false").lower() == "true",
            "fill_display_names": os.getenv("MODEL_RESOLVER_FILL_DISPLAY_NAMES", "true").lower() == "true",
        }

        prefixes = os.getenv("MODEL_RESOLVER_TABLE_PREFIXES")
        if prefixes is not None:
            resolver_options["table_prefixes"] = [p.strip() for p in prefixes.split(",")]

        return cls(
            resolver=ResolverConfig(**resolver_options),
            log_level=LogLevel(os.getenv("LOG_LEVEL", "INFO").upper()),
            json_logs=os.getenv("LOG_JSON", "false").lower() == "true",
            metrics_enabled=os.getenv("METRICS_ENABLED", "true").lower() == "true",
        )

    model_config = {"use_enum_values": True}


# Global configuration instance
_config: Optional[SystemConfig] = None


def get_config() -> SystemConfig:
    """Get the global configuration instance"""
    global _config
    if _config is None:
        _config = SystemConfig.from_env()
    return _config


def set_config(config: SystemConfig) -> None:
    """Set the global configuration instance"""
    global _config
    _config = config


def reset_config() -> None:
    """Reset the global configuration instance"""
    global _config
    _config = None
