"""Configuration management for tagmend."""

import tomllib
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, ClassVar

from tagmend.config.file_ops import write_text_file
from tagmend.config.paths import default_config_path
from tagmend.platform.logging import logger

THREAD_COUNT_DEFAULT: int = 5
OUTPUT_DIR_DEFAULT: str = "output"


def _path_field(default: Path | None = None) -> Any:
    """Create a field for Path objects with proper conversion.

    Args:
        default: Default value for the field.

    Returns:
        Field with proper metadata for path handling.
    """
    return field(default=default, metadata={"path": True})


@dataclass
class Config:
    """Application configuration."""

    # Log file path
    log_file: Path | None = _path_field()

    # Worker threads used by batch commands
    thread_count: int = THREAD_COUNT_DEFAULT

    # Mirror root used by fix/tag when not writing in place
    output_dir: str = OUTPUT_DIR_DEFAULT

    _instance: ClassVar["Config | None"] = None
    _loaded_from: ClassVar[Path | None] = None

    def __post_init__(self) -> None:
        """Convert string paths to ``Path`` objects using field metadata."""
        for f in fields(self):
            if not f.metadata.get("path", False):
                continue
            value = getattr(self, f.name)
            if isinstance(value, str):
                setattr(self, f.name, Path(value) if value.strip() else None)

    def save(self, target: Path | None = None) -> Path:
        """Save configuration to file.

        Args:
            target: Destination file. Defaults to the portable config path.

        Returns:
            Path: The file that was written.
        """
        config_dict = asdict(self)
        for key, value in config_dict.items():
            if isinstance(value, Path):
                config_dict[key] = str(value)

        destination = target or default_config_path()
        try:
            write_text_file(destination, self._render_toml(config_dict))
        except OSError as e:
            logger.error("Failed to save configuration: %s", e)
            raise
        logger.info("Configuration saved to %s", destination)
        return destination

    def _render_toml(self, config: dict[str, Any]) -> str:
        """Render configuration as TOML with inline guidance."""

        lines: list[str] = ["# tagmend Configuration File", ""]

        lines.append("# Log file path (optional)")
        lines.append('# Example: log_file = "/path/to/logs/tagmend.log"')
        if config["log_file"] is not None:
            lines.append(f"log_file = {self._format_toml_value(config['log_file'])}")
        lines.append("")

        lines.append("# Number of worker threads for batch commands (default 5)")
        lines.append(f"thread_count = {self._format_toml_value(config['thread_count'])}")
        lines.append("")

        lines.append("# Output directory used by fix/tag unless writing in place")
        lines.append(f"output_dir = {self._format_toml_value(config['output_dir'])}")
        lines.append("")

        return "\n".join(lines)

    def _format_toml_value(self, value: Any) -> str:
        """Format a value for TOML serialization."""
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, (str, Path)):
            escaped = str(value).replace("\\", "\\\\").replace('"', '\\"')
            return f'"{escaped}"'
        return str(value)

    @classmethod
    def load(cls, config_file: Path | None = None) -> "Config":
        """Load configuration from file, creating a default one when missing.

        Args:
            config_file: Explicit file to read. Defaults to the portable path.

        Returns:
            Config: Loaded configuration object.

        Raises:
            tomllib.TOMLDecodeError: If the file exists but is not valid TOML.
        """
        if cls._instance is not None and config_file is None:
            return cls._instance

        source = config_file or default_config_path()

        if not source.exists():
            instance = cls()
            try:
                _ = instance.save(source)
            except OSError:
                logger.warning("Continuing with in-memory defaults; %s is not writable", source)
            cls._instance = instance
            cls._loaded_from = source
            return instance

        try:
            with open(source, "rb") as f:
                config_dict = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            logger.error("Failed to load configuration from %s: %s", source, e)
            raise

        known = {f.name for f in fields(cls)}
        unknown = sorted(set(config_dict) - known)
        if unknown:
            logger.warning("Ignoring unknown configuration keys: %s", ", ".join(unknown))
        instance = cls(**{key: value for key, value in config_dict.items() if key in known})

        logger.debug("Configuration loaded from %s", source)
        cls._instance = instance
        cls._loaded_from = source
        return instance


# Global configuration instance
config = Config.load()
