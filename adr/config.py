"""Configuration for ADR scans: defaults, config files, and CLI overrides."""

import json
import logging
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml

logger = logging.getLogger(__name__)


OUTPUT_FORMATS = ("text", "json", "html")
DEFAULT_CONFIG_FILE = ".adr-checker.json"


class ConfigError(ValueError):
    """Raised when a configuration file holds an unusable value."""


@dataclass(frozen=True)
class LanguageConfig:
    """
    Source files of one language.

    ``comment_patterns`` are regular expressions; each one that matches a
    line yields a reference. The ADR number is taken from the pattern's first
    group, or from the ``ADR-<digits>`` text inside the match.
    """

    extensions: List[str]
    comment_patterns: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "extensions": list(self.extensions),
            "commentPatterns": list(self.comment_patterns),
        }

    @classmethod
    def from_dict(cls, name: str, data: Any) -> "LanguageConfig":
        if not isinstance(data, dict):
            raise ConfigError(f"language '{name}' must be a mapping")
        extensions = _string_list(data.get("extensions", []), f"languages.{name}.extensions")
        patterns = _string_list(data.get("commentPatterns", []), f"languages.{name}.commentPatterns")
        return cls(extensions=extensions, comment_patterns=patterns)


@dataclass(frozen=True)
class AdrConfig:
    """Settings for one scan."""

    adr_dir: str = "docs/adr"
    source_dir: str = "src"
    languages: Dict[str, LanguageConfig] = field(default_factory=dict)
    output_format: str = "text"
    ignore_patterns: List[str] = field(default_factory=list)

    @property
    def extensions(self) -> List[str]:
        """All source extensions across configured languages, in config order."""
        seen: List[str] = []
        for language in self.languages.values():
            for ext in language.extensions:
                if ext not in seen:
                    seen.append(ext)
        return seen

    def to_dict(self) -> Dict[str, Any]:
        return {
            "adrDir": self.adr_dir,
            "sourceDir": self.source_dir,
            "languages": {name: lang.to_dict() for name, lang in self.languages.items()},
            "outputFormat": self.output_format,
            "ignorePatterns": list(self.ignore_patterns),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any], defaults: Optional["AdrConfig"] = None) -> "AdrConfig":
        """
        Build a config from a mapping using the config-file key names.

        Keys missing from ``data`` keep the value from ``defaults``; keys that
        are present replace it entirely (``languages`` is not merged per
        language).

        Raises:
            ConfigError: If a value has the wrong shape.
        """
        base = defaults if defaults is not None else DEFAULT_CONFIG
        if not isinstance(data, dict):
            raise ConfigError("configuration must be a mapping")

        known = {"adrDir", "sourceDir", "languages", "outputFormat", "ignorePatterns"}
        for key in sorted(set(data) - known):
            logger.debug("Ignoring unknown configuration key: %s", key)

        updates: Dict[str, Any] = {}
        if "adrDir" in data:
            updates["adr_dir"] = _string(data["adrDir"], "adrDir")
        if "sourceDir" in data:
            updates["source_dir"] = _string(data["sourceDir"], "sourceDir")
        if "languages" in data:
            languages = data["languages"]
            if not isinstance(languages, dict):
                raise ConfigError("languages must be a mapping")
            updates["languages"] = {
                str(name): LanguageConfig.from_dict(str(name), settings)
                for name, settings in languages.items()
            }
        if "outputFormat" in data:
            updates["output_format"] = _output_format(data["outputFormat"])
        if "ignorePatterns" in data:
            updates["ignore_patterns"] = _string_list(data["ignorePatterns"], "ignorePatterns")

        return replace(base, **updates)


DEFAULT_CONFIG = AdrConfig(
    adr_dir="docs/adr",
    source_dir="src",
    languages={
        "javascript": LanguageConfig(
            extensions=[".js", ".jsx", ".ts", ".tsx"],
            comment_patterns=[
                # Single line comment: // ADR-0001
                r"//\s*ADR-(\d+)",
                # Block comment on one line: /* ADR-0001 */
                r"/\*\s*ADR-(\d+)\s*\*/",
                # JSDoc tag: * @adr ADR-0001
                r"\*\s*@adr\s*ADR-(\d+)",
            ],
        ),
    },
    output_format="text",
    ignore_patterns=["node_modules/**", "dist/**", "build/**", ".git/**"],
)


def load_config(
    path: Optional[Union[str, Path]] = None,
    adr_dir: Optional[str] = None,
    source_dir: Optional[str] = None,
    output_format: Optional[str] = None,
) -> AdrConfig:
    """
    Load configuration from a file, falling back to defaults.

    The file may be JSON or YAML. A file that cannot be read or holds invalid
    values is reported with a warning and the default configuration is used
    instead. Explicit arguments override whatever the file says.

    Args:
        path: Optional configuration file path.
        adr_dir: Override for the ADR documents directory.
        source_dir: Override for the source code directory.
        output_format: Override for the report format.

    Returns:
        The effective configuration.
    """
    config = DEFAULT_CONFIG

    if path is not None:
        config_path = Path(path)
        try:
            data = _parse_config_file(config_path)
            config = AdrConfig.from_dict(data if data is not None else {})
            logger.debug("Loaded configuration from %s", config_path)
        except (OSError, UnicodeDecodeError, json.JSONDecodeError, yaml.YAMLError, ConfigError) as e:
            logger.warning("Error loading config file %s: %s", config_path, e)
            logger.warning("Using default configuration")
            config = DEFAULT_CONFIG

    overrides: Dict[str, Any] = {}
    if adr_dir:
        overrides["adr_dir"] = adr_dir
    if source_dir:
        overrides["source_dir"] = source_dir
    if output_format:
        overrides["output_format"] = _output_format(output_format)

    return replace(config, **overrides) if overrides else config


def _parse_config_file(config_path: Path) -> Any:
    """Parse a config file by suffix; unknown suffixes try JSON, then YAML."""
    content = config_path.read_text(encoding="utf-8")
    suffix = config_path.suffix.lower()

    if suffix in {".yaml", ".yml"}:
        return yaml.safe_load(content)

    elif suffix == ".json":
        return json.loads(content)

    else:
        try:
            return json.loads(content)
        except json.JSONDecodeError:
            return yaml.safe_load(content)


def create_default_config(path: Union[str, Path] = DEFAULT_CONFIG_FILE, force: bool = False) -> Path:
    """
    Write the default configuration to a file.

    JSON is written unless the file name ends in ``.yaml``/``.yml``.

    Args:
        path: Destination file.
        force: Overwrite an existing file.

    Returns:
        The resolved path that was written.

    Raises:
        FileExistsError: If the file exists and ``force`` is False.
        OSError: If the file cannot be written.
    """
    config_path = Path(path).resolve()
    if config_path.exists() and not force:
        raise FileExistsError(f"{config_path} already exists")

    data = DEFAULT_CONFIG.to_dict()
    if config_path.suffix.lower() in {".yaml", ".yml"}:
        content = yaml.safe_dump(data, sort_keys=False)
    else:
        content = json.dumps(data, indent=2) + "\n"

    config_path.write_text(content, encoding="utf-8")
    logger.info("Created default configuration at %s", config_path)
    return config_path


def _string(value: Any, key: str) -> str:
    if not isinstance(value, str) or not value:
        raise ConfigError(f"{key} must be a non-empty string")
    return value


def _string_list(value: Any, key: str) -> List[str]:
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ConfigError(f"{key} must be a list of strings")
    return list(value)


def _output_format(value: Any) -> str:
    if value not in OUTPUT_FORMATS:
        raise ConfigError(f"outputFormat must be one of {', '.join(OUTPUT_FORMATS)}, got {value!r}")
    return value
