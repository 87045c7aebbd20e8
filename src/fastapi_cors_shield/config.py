"""Loading `CORSOptions` from files and environment variables.

Supported file formats are JSON, YAML and TOML. The options may sit at the top
level of the document or under a `cors` section:

    ```yaml
    cors:
      AllowedOrigins: ["https://app.example.com", "http*://*.example.com"]
      AllowedHeaders: ["Authorization", "Content-Type"]
      AllowCredentials: true
      MaxAge: 600
    ```
"""

import json
import logging
import os
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

import toml
import yaml
from pydantic import ValidationError

from fastapi_cors_shield.errors import CORSConfigurationError
from fastapi_cors_shield.options import CORSOptions

logger = logging.getLogger(__name__)

_TRUTHY = {"1", "true", "yes", "on"}


class ConfigFormat(str, Enum):
    """Configuration file format enumeration."""
    JSON = "json"
    YAML = "yaml"
    TOML = "toml"


_SUFFIX_FORMATS = {
    ".json": ConfigFormat.JSON,
    ".yaml": ConfigFormat.YAML,
    ".yml": ConfigFormat.YAML,
    ".toml": ConfigFormat.TOML,
}


def detect_format(path: Path) -> ConfigFormat:
    try:
        return _SUFFIX_FORMATS[path.suffix.lower()]
    except KeyError:
        raise CORSConfigurationError(
            f"unsupported configuration format: {path.suffix or path.name}"
        ) from None


def _parse(content: str, config_format: ConfigFormat) -> Any:
    if config_format == ConfigFormat.JSON:
        return json.loads(content)
    if config_format == ConfigFormat.YAML:
        return yaml.safe_load(content)
    return toml.loads(content)


def options_from_mapping(data: Mapping[str, Any]) -> CORSOptions:
    """Validate a mapping of option values, unwrapping a `cors` section if present."""
    if "cors" in data and isinstance(data["cors"], Mapping):
        data = data["cors"]
    try:
        return CORSOptions.model_validate(dict(data))
    except ValidationError as e:
        raise CORSConfigurationError(f"invalid CORS options: {e}", cause=e) from e


def load_options(
    path: Union[str, Path],
    config_format: Optional[ConfigFormat] = None,
    encoding: str = "utf-8",
) -> CORSOptions:
    """Read CORS options from a JSON, YAML or TOML file.

    Args:
        path: The file to read
        config_format: Overrides the format detected from the file suffix
        encoding: File encoding

    Raises:
        CORSConfigurationError: If the file is missing, cannot be parsed or
            holds invalid option values
    """
    path = Path(path)
    config_format = ConfigFormat(config_format) if config_format else detect_format(path)
    if not path.exists():
        raise CORSConfigurationError(f"configuration file not found: {path}")

    content = path.read_text(encoding=encoding)
    try:
        data = _parse(content, config_format)
    except (ValueError, yaml.YAMLError, toml.TomlDecodeError) as e:
        raise CORSConfigurationError(f"cannot parse {path}: {e}", cause=e) from e

    if data is None:
        logger.warning(f"Configuration file {path} is empty, using default CORS options")
        data = {}
    if not isinstance(data, Mapping):
        raise CORSConfigurationError(f"{path} must contain a mapping of CORS options")

    logger.debug(f"Loaded CORS options from {path} ({config_format.value})")
    return options_from_mapping(data)


def _split_csv(raw: str) -> List[str]:
    return [item.strip() for item in raw.split(",") if item.strip()]


def options_from_env(
    prefix: str = "CORS_", environ: Optional[Mapping[str, str]] = None
) -> CORSOptions:
    """Build CORS options from `<prefix>*` environment variables.

    Recognised variables: `ALLOWED_ORIGINS`, `ALLOWED_METHODS`,
    `ALLOWED_HEADERS`, `EXPOSED_HEADERS` (comma separated), `MAX_AGE` and
    `ALLOW_CREDENTIALS` (1/true/yes/on).
    """
    environ = os.environ if environ is None else environ
    values: Dict[str, Any] = {}

    for name in ("allowed_origins", "allowed_methods", "allowed_headers", "exposed_headers"):
        raw = environ.get(f"{prefix}{name.upper()}")
        if raw is not None:
            values[name] = _split_csv(raw)

    raw_max_age = environ.get(f"{prefix}MAX_AGE")
    if raw_max_age is not None and raw_max_age.strip():
        try:
            values["max_age"] = int(raw_max_age)
        except ValueError as e:
            raise CORSConfigurationError(
                f"{prefix}MAX_AGE must be an integer, got {raw_max_age!r}", cause=e
            ) from e

    raw_credentials = environ.get(f"{prefix}ALLOW_CREDENTIALS")
    if raw_credentials is not None:
        values["allow_credentials"] = raw_credentials.strip().lower() in _TRUTHY

    logger.debug(f"Loaded CORS options from environment: {sorted(values)}")
    return CORSOptions(**values)
