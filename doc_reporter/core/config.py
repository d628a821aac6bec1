"""
Configuration management for Doc Reporter.
"""

import os
from pathlib import Path
from typing import Optional, Dict, Any
from dataclasses import MISSING, dataclass, field

from doc_reporter.core.errors import ConfigurationError

CONFIG_FILE_NAME = "doc_reporter.toml"
CONFIG_ENV_VAR = "DOC_REPORTER_CONFIG"

# Host reporter options (camelCase) -> Config fields
OPTION_KEYS = {
    "outputDir": "output_dir",
    "screenshotDir": "screenshot_dir",
    "buildSegment": "build_segment",
    "publishSegment": "publish_segment",
    "sourceExtension": "source_extension",
    "jsonIndent": "json_indent",
}


@dataclass
class Config:
    """Configuration class for Doc Reporter."""

    # Where reports go. Kept as given so a wrong type can be reported later.
    output_dir: Any = None
    screenshot_dir: Path = field(default_factory=lambda: Path("screenShots"))

    # Build path -> publish path translation
    build_segment: str = "/build/"
    publish_segment: str = "/publish/output/"
    source_extension: str = ".feature"

    # Output formatting
    json_indent: Optional[int] = None

    verbosity: int = 0  # 0=minimal, 1=progress, 2=details, 3=debug
    config_file: Optional[Path] = None
    load_config_file: bool = True

    def __post_init__(self):
        """Post-initialization processing."""
        if self.load_config_file:
            self._load_config_file()

        self.screenshot_dir = Path(self.screenshot_dir)

        if not 0 <= self.verbosity <= 3:
            raise ValueError(f"verbosity must be between 0 and 3, got {self.verbosity}")

        if not self.build_segment:
            raise ConfigurationError("build_segment must not be empty")

        if self.json_indent is not None and not isinstance(self.json_indent, int):
            raise ConfigurationError(f"json_indent must be an integer, got {self.json_indent!r}")

    def _load_config_file(self) -> None:
        """Load defaults from doc_reporter.toml if present.

        Values already set to something other than the field default win
        over the file, so explicit arguments are never overridden.
        """
        env_path = os.environ.get(CONFIG_ENV_VAR)
        if env_path:
            self.config_file = Path(env_path).resolve()
        elif self.config_file is None:
            self.config_file = Path.cwd() / CONFIG_FILE_NAME
        else:
            self.config_file = Path(self.config_file)

        if not self.config_file.exists():
            return

        try:
            try:
                import tomllib  # Python 3.11+
            except ModuleNotFoundError:  # Python 3.8-3.10
                import tomli as tomllib

            data = tomllib.loads(self.config_file.read_text())
            table = data.get("doc_reporter") or data.get("tool", {}).get("doc_reporter", {})
        except Exception as e:
            raise ConfigurationError(f"Failed to read config file: {self.config_file}: {e}") from e

        if not isinstance(table, dict):
            return

        defaults = Config.__dataclass_fields__
        for key, value in table.items():
            key = OPTION_KEYS.get(key, key)
            if key not in defaults or key in ("config_file", "load_config_file"):
                continue
            if value is None:
                continue
            if getattr(self, key) != _field_default(key):
                continue
            setattr(self, key, value)

    def validate_output_dir(self) -> str:
        """
        Check that an output directory was configured.

        Returns:
            The output directory

        Raises:
            ConfigurationError: If outputDir is missing or not a string
        """
        if not isinstance(self.output_dir, str) or not self.output_dir:
            raise ConfigurationError("empty or invalid 'outputDir'")
        return self.output_dir

    @classmethod
    def from_options(cls, options: Optional[Dict[str, Any]], **kwargs) -> "Config":
        """Create configuration from host reporter options (camelCase keys)."""
        init_kwargs = dict(kwargs)
        for option, key in OPTION_KEYS.items():
            if options and option in options and options[option] is not None:
                init_kwargs[key] = options[option]
        return cls(**init_kwargs)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return {
            "output_dir": self.output_dir,
            "screenshot_dir": str(self.screenshot_dir),
            "build_segment": self.build_segment,
            "publish_segment": self.publish_segment,
            "source_extension": self.source_extension,
            "json_indent": self.json_indent,
            "verbosity": self.verbosity,
            "config_file": str(self.config_file) if self.config_file else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Config":
        """Create configuration from dictionary."""
        data = dict(data)
        if isinstance(data.get("config_file"), str):
            data["config_file"] = Path(data["config_file"])
        return cls(**data)


def _field_default(name: str) -> Any:
    f = Config.__dataclass_fields__[name]
    if f.default_factory is not MISSING:
        return f.default_factory()
    return f.default
