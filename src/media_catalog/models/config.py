"""Configuration model for media catalog."""

import json
from dataclasses import asdict, dataclass, field, fields, is_dataclass
from pathlib import Path
from typing import Optional

from ..exceptions import ConfigurationError

DEFAULT_LIBRARY_DIR = Path.home() / ".media_catalog"
DEFAULT_CONFIG_FILENAME = "config.json"


@dataclass
class ReportConfig:
    """Configuration for the yearly report."""
    top_rated_limit: int = 3
    hours_per_entry: int = 2
    export_format: str = "json"  # json, csv, or txt


@dataclass
class DisplayConfig:
    """Configuration for terminal output."""
    tag_spacing: int = 1
    max_tag_width: Optional[int] = None  # None: use the terminal width
    list_limit: int = 50


@dataclass
class CatalogConfig:
    """Main configuration model."""
    library_directory: Path = field(default_factory=lambda: DEFAULT_LIBRARY_DIR)
    report: ReportConfig = field(default_factory=ReportConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)

    @classmethod
    def default(cls) -> "CatalogConfig":
        """Create a default configuration."""
        return cls()


def _dataclass_to_dict(obj):
    """Convert dataclass to dict recursively."""
    if is_dataclass(obj):
        return {key: _dataclass_to_dict(value) for key, value in asdict(obj).items()}
    elif isinstance(obj, Path):
        return str(obj)
    elif isinstance(obj, dict):
        return {key: _dataclass_to_dict(value) for key, value in obj.items()}
    elif isinstance(obj, list):
        return [_dataclass_to_dict(item) for item in obj]
    else:
        return obj


def _dict_to_dataclass(data, dataclass_type):
    """Convert dict to dataclass recursively."""
    if not is_dataclass(dataclass_type):
        return data
    if not isinstance(data, dict):
        raise ConfigurationError(f"Expected an object for {dataclass_type.__name__}, got {type(data).__name__}")

    field_types = {f.name: f.type for f in fields(dataclass_type)}

    unknown = set(data) - set(field_types)
    if unknown:
        raise ConfigurationError(f"Unknown {dataclass_type.__name__} option(s): {', '.join(sorted(unknown))}")

    kwargs = {}
    for field_name, field_type in field_types.items():
        if field_name in data:
            if is_dataclass(field_type):
                kwargs[field_name] = _dict_to_dataclass(data[field_name], field_type)
            elif field_type is Path:
                value = data[field_name]
                if not isinstance(value, str):
                    raise ConfigurationError(f"{field_name} must be a path string, got {type(value).__name__}")
                kwargs[field_name] = Path(value).expanduser()
            else:
                kwargs[field_name] = data[field_name]

    return dataclass_type(**kwargs)


def load_config(config_path: Path) -> CatalogConfig:
    """Load configuration from JSON file.

    A missing file yields the defaults.

    Raises:
        ConfigurationError: If the file cannot be read, is not valid JSON,
            or has unknown keys or mistyped paths.
    """
    config_path = Path(config_path)
    if not config_path.exists():
        return CatalogConfig.default()

    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            config_data = json.load(f)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ConfigurationError(f"Invalid configuration file {config_path}: {e}") from e
    except OSError as e:
        raise ConfigurationError(f"Cannot read configuration file {config_path}: {e}") from e

    config = _dict_to_dataclass(config_data, CatalogConfig)
    if config.report.export_format not in ("json", "csv", "txt"):
        raise ConfigurationError(f"Unsupported export format: {config.report.export_format}")
    return config


def save_config(config: CatalogConfig, config_path: Path) -> None:
    """Save configuration to JSON file."""
    config_dict = _dataclass_to_dict(config)

    Path(config_path).parent.mkdir(parents=True, exist_ok=True)
    with open(config_path, 'w', encoding='utf-8') as f:
        json.dump(config_dict, f, indent=2)


def create_default_config(config_path: Path) -> None:
    """Create a default configuration file."""
    save_config(CatalogConfig.default(), config_path)
