"""NMEA source configuration.

Sources are described per environment, either in a YAML file (see
`config/nmea_sources.yaml`) or by the built-in defaults below. String
values may reference environment variables as `${NAME}` or
`${NAME:-fallback}`.
"""

import logging
import os
import re
from pathlib import Path
from typing import Any, Optional

import yaml

from bosun.sources.base import NMEASource, SourceConfigError

logger = logging.getLogger(__name__)

ENV_REFERENCE = re.compile(r"\$\{(?P<name>[A-Za-z_][A-Za-z0-9_]*)(?::-(?P<default>[^}]*))?\}")

FALLBACK_ENVIRONMENT = "development"

_SAMPLE_CAPTURE = {
    "name": "Sample Capture",
    "type": "sample",
    "config": {"interval_seconds": 0.5, "loop": True},
}

_INSTRUMENT_BUS = {
    "name": "Instrument Bus",
    "type": "tcp",
    "config": {"address": "${NMEA_ADDRESS}", "connect_timeout_seconds": 10},
}

DEFAULT_CONFIGS: dict[str, dict[str, Any]] = {
    "development": {"source": _SAMPLE_CAPTURE},
    "testing": {
        "source": {
            "name": "Test Capture",
            "type": "sample",
            "config": {"interval_seconds": 0, "loop": False},
        },
    },
    "staging": {"source": _INSTRUMENT_BUS},
    "production": {"source": _INSTRUMENT_BUS},
}


def expand_env(value: Any) -> Any:
    """Replace `${NAME}` references in every string of a config tree.

    An unset variable without a fallback expands to an empty string.
    """
    if isinstance(value, str):
        return ENV_REFERENCE.sub(
            lambda m: os.getenv(m.group("name"), m.group("default") or ""), value
        )
    if isinstance(value, dict):
        return {key: expand_env(item) for key, item in value.items()}
    if isinstance(value, list):
        return [expand_env(item) for item in value]
    return value


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        document = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise SourceConfigError(f"Invalid YAML in {path}: {e}")

    if document is None:
        return {}
    if not isinstance(document, dict):
        raise SourceConfigError(f"Expected a mapping of environments in {path}")
    return document


def load_config(
    config_file: Optional[str] = None,
    environment: Optional[str] = None,
) -> dict[str, Any]:
    """Get the source configuration for an environment.

    The YAML file is consulted first; an environment it does not define
    falls back to the built-in defaults, and an environment unknown to
    both falls back to development.

    Args:
        config_file: YAML file keyed by environment name
        environment: Environment name (default: $ENVIRONMENT or development)

    Returns:
        Configuration with environment references expanded

    Raises:
        SourceConfigError: If the file is not a valid YAML mapping
    """
    environment = environment or os.getenv("ENVIRONMENT", FALLBACK_ENVIRONMENT)

    if config_file and Path(config_file).exists():
        sections = _read_yaml(Path(config_file))
        if environment in sections:
            logger.info(f"Using '{environment}' source configuration from {config_file}")
            return expand_env(sections[environment])
        logger.warning(f"{config_file} has no '{environment}' section, using defaults")

    if environment not in DEFAULT_CONFIGS:
        logger.warning(f"No defaults for environment '{environment}', using {FALLBACK_ENVIRONMENT}")
        environment = FALLBACK_ENVIRONMENT

    return expand_env(DEFAULT_CONFIGS[environment])


def create_source(source_type: str, config: dict[str, Any]) -> NMEASource:
    """Instantiate an unstarted source of the given type.

    Raises:
        SourceConfigError: If the source type is unknown
    """
    kind = source_type.lower()
    if kind == "tcp":
        from bosun.sources.tcp import TCPSource
        return TCPSource(config)
    if kind == "sample":
        from bosun.sources.sample import SampleSource
        return SampleSource(config)
    raise SourceConfigError(f"Unknown source type: {source_type}")


def create_source_from_config(config: dict[str, Any]) -> NMEASource:
    """Create the source described by an environment configuration.

    Raises:
        SourceConfigError: If no source or source type is configured
    """
    section = config.get("source")
    if not section:
        raise SourceConfigError("No source configured")
    if not section.get("type"):
        raise SourceConfigError("Source type is missing")

    options = dict(section.get("config") or {})
    options["name"] = section.get("name", section["type"])

    source = create_source(section["type"], options)
    logger.info(f"Created {section['type']} source '{source.name}'")
    return source


def create_source_from_settings(settings: Any) -> NMEASource:
    """Create the source for the application settings.

    The YAML sources file wins when it exists; otherwise the source is
    built from the `nmea_source` and `nmea_address` settings.
    """
    config_file = settings.sources_config_file
    if config_file and Path(config_file).exists():
        return create_source_from_config(load_config(config_file, settings.environment))

    if settings.nmea_source == "tcp":
        options = {"name": "Instrument Bus", "address": settings.nmea_address}
    else:
        options = {
            "name": "Sample Capture",
            "interval_seconds": settings.sample_interval_seconds,
            "loop": True,
        }
    return create_source(settings.nmea_source, options)
