"""
Configuration Management
========================

Configuration utilities for the conversion pipeline.
"""

from jats_core.config.settings import (
    PipelineConfig,
    TransformConfig,
    ValidationConfig,
    load_config,
    save_config,
    get_default_config,
    configure_logging,
    DEFAULT_RULESET_DIR,
    JATS_PUBLISHING_PUBLIC_ID,
    REGISTRATION_SCHEMA,
    REPOSITORY_SCHEMA,
    DIRECTORY_SCHEMA,
)

__all__ = [
    "PipelineConfig",
    "TransformConfig",
    "ValidationConfig",
    "load_config",
    "save_config",
    "get_default_config",
    "configure_logging",
    "DEFAULT_RULESET_DIR",
    "JATS_PUBLISHING_PUBLIC_ID",
    "REGISTRATION_SCHEMA",
    "REPOSITORY_SCHEMA",
    "DIRECTORY_SCHEMA",
]
