"""
Configuration Settings
======================

Configuration dataclasses for the conversion and validation pipeline.
"""

from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import Any, Dict, Optional
import json
import logging
import os

try:
    import yaml
    YAML_AVAILABLE = True
except ImportError:
    YAML_AVAILABLE = False

logger = logging.getLogger(__name__)

# Rulesets bundled with the package
DEFAULT_RULESET_DIR = Path(__file__).resolve().parent.parent / "data" / "xsl"

JATS_PUBLISHING_PUBLIC_ID = "-//NLM//DTD JATS (Z39.96) Journal Publishing DTD v1.0 20120330//EN"

REGISTRATION_SCHEMA = "http://www.crossref.org/schema/deposit/crossref4.3.3.xsd"
REPOSITORY_SCHEMA = "http://schema.datacite.org/meta/kernel-2.2/metadata.xsd"
DIRECTORY_SCHEMA = "http://www.doaj.org/schemas/doajArticles.xsd"

ENV_PREFIX = "JATS_CORE_"


@dataclass
class TransformConfig:
    """Transformation-related configuration."""

    ruleset_dir: str = str(DEFAULT_RULESET_DIR)
    ruleset_suffix: str = ".xsl"
    cache_stylesheets: bool = True


@dataclass
class ValidationConfig:
    """DTD and schema validation configuration."""

    # public id -> local DTD path
    dtd_catalog: Dict[str, str] = field(default_factory=dict)
    # schema location -> local XSD path
    schema_catalog: Dict[str, str] = field(default_factory=dict)
    allow_network: bool = False


@dataclass
class PipelineConfig:
    """
    Complete pipeline configuration.

    Example:
        config = PipelineConfig()
        config.validation.schema_catalog[REGISTRATION_SCHEMA] = "schemas/crossref4.3.3.xsd"
        save_config(config, Path("jats_core.yaml"))
    """

    transform: TransformConfig = field(default_factory=TransformConfig)
    validation: ValidationConfig = field(default_factory=ValidationConfig)

    log_level: str = "INFO"

    # Free-form settings for embedding applications
    custom: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict:
        """Plain nested dictionary, as written by ``save_config``."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> 'PipelineConfig':
        """
        Build a config from a (possibly partial) dictionary.

        Unknown keys inside a section raise ``TypeError``.
        """
        return cls(
            transform=TransformConfig(**data.get('transform', {})),
            validation=ValidationConfig(**data.get('validation', {})),
            log_level=data.get('log_level', "INFO"),
            custom=dict(data.get('custom', {})),
        )

    @classmethod
    def from_env(cls, environ: Optional[Dict[str, str]] = None) -> 'PipelineConfig':
        """
        Create configuration from environment variables.

        Environment variable naming:
        - JATS_CORE_CONFIG: config file to start from
        - JATS_CORE_RULESET_DIR
        - JATS_CORE_ALLOW_NETWORK
        - JATS_CORE_LOG_LEVEL
        """
        environ = os.environ if environ is None else environ

        if config_file := environ.get(f"{ENV_PREFIX}CONFIG"):
            config = load_config(Path(config_file))
        else:
            config = cls()

        if ruleset_dir := environ.get(f"{ENV_PREFIX}RULESET_DIR"):
            config.transform.ruleset_dir = ruleset_dir
        if allow_network := environ.get(f"{ENV_PREFIX}ALLOW_NETWORK"):
            config.validation.allow_network = allow_network.lower() in ("true", "1", "yes")
        if log_level := environ.get(f"{ENV_PREFIX}LOG_LEVEL"):
            config.log_level = log_level.upper()

        return config


_YAML_SUFFIXES = ('.yaml', '.yml')


def _config_format(config_path: Path) -> str:
    suffix = config_path.suffix.lower()
    if suffix in _YAML_SUFFIXES:
        if not YAML_AVAILABLE:
            raise ImportError("PyYAML is required for YAML config files (install jats-core[yaml])")
        return 'yaml'
    if suffix == '.json':
        return 'json'
    raise ValueError(f"Unsupported config format: {suffix}")


def load_config(config_path: Path) -> PipelineConfig:
    """
    Read a JSON or YAML configuration file; the format follows the extension.

    Sections missing from the file keep their defaults.

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: For extensions other than .json, .yaml and .yml
    """
    config_path = Path(config_path)
    if not config_path.is_file():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    fmt = _config_format(config_path)
    text = config_path.read_text(encoding='utf-8')
    data = (yaml.safe_load(text) if fmt == 'yaml' else json.loads(text)) or {}

    logger.info(f"Loaded {fmt} configuration from {config_path}")
    return PipelineConfig.from_dict(data)


def save_config(config: PipelineConfig, config_path: Path) -> None:
    """Write ``config`` as JSON or YAML, creating parent directories."""
    config_path = Path(config_path)
    fmt = _config_format(config_path)

    if fmt == 'yaml':
        text = yaml.safe_dump(config.to_dict(), default_flow_style=False, sort_keys=False)
    else:
        text = json.dumps(config.to_dict(), indent=2)

    config_path.parent.mkdir(parents=True, exist_ok=True)
    config_path.write_text(text, encoding='utf-8')
    logger.info(f"Saved {fmt} configuration to {config_path}")


def get_default_config() -> PipelineConfig:
    """Get default configuration."""
    return PipelineConfig()


def configure_logging(config: PipelineConfig) -> None:
    """Apply the configured log level for applications embedding the pipeline."""
    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
