"""Configuration management for git-commit-rules."""
from pathlib import Path
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field
import tomli
import tomli_w
import os
import re
import sys

DEFAULT_CONFIG_FILENAME = ".gitcommitrules.toml"
CONFIG_SECTION = "gitcommitrules"
ENV_PREFIX = "GIT_COMMIT_RULES_"

_STRING_FIELDS = ("log_file", "log_directory")
_BOOL_FIELDS = ("always_log", "show_hints")


class Config(BaseModel):
    """Configuration settings for git-commit-rules.

    These settings only affect how results are reported. The validation
    rules themselves are fixed.
    """

    always_log: bool = Field(
        default=False,
        description="Whether to always write a timestamped log file"
    )

    log_file: Optional[str] = Field(
        default=None,
        description="Path to log file (if not using automatic log file generation)"
    )

    log_directory: Optional[str] = Field(
        default=None,
        description="Directory for automatically named log files"
    )

    show_hints: bool = Field(
        default=True,
        description="Whether to print the allowed types and summary budget on failure"
    )

    @staticmethod
    def _sanitize_string(value: str) -> str:
        """Strip control characters and cap the length of a string setting."""
        if not value:
            return value

        value = re.sub(r'[\x00-\x08\x0B\x0C\x0E-\x1F\x7F]', '', value)

        if len(value) > 1000:
            value = value[:1000]

        return value.strip()

    @staticmethod
    def _is_safe_path(path: str) -> bool:
        """Check if a path is safe (relative, no path traversal)."""
        if not path:
            return False

        if '..' in path or path.startswith('/') or '\\' in path:
            return False

        if os.path.isabs(path):
            return False

        return True

    @classmethod
    def load(cls, repo_path: Path) -> 'Config':
        """Load configuration from the config file.

        Args:
            repo_path: Directory holding the config file

        Returns:
            Config: Configuration object with values from file or defaults
        """
        config_path = repo_path / DEFAULT_CONFIG_FILENAME

        if not config_path.exists():
            return cls()

        try:
            with config_path.open('rb') as f:
                config_data = tomli.load(f)

            config_section = dict(config_data.get(CONFIG_SECTION, {}))
            for key in _STRING_FIELDS:
                if isinstance(config_section.get(key), str):
                    config_section[key] = cls._sanitize_string(config_section[key])

            return cls(**config_section)
        except Exception as e:
            # If there's any error reading the config, use defaults
            print(f"Warning: Error reading config file: {e}", file=sys.stderr)
            return cls()

    def save(self, repo_path: Path) -> None:
        """Save configuration to the config file.

        Args:
            repo_path: Directory to write the config file into
        """
        config_path = repo_path / DEFAULT_CONFIG_FILENAME

        try:
            # TOML has no null, so unset values are left out
            config_dict = {k: v for k, v in self.model_dump().items() if v is not None}

            for key in _STRING_FIELDS:
                if key in config_dict and not self._is_safe_path(config_dict[key]):
                    print(f"Warning: Unsafe path '{config_dict[key]}' for {key}, not saving", file=sys.stderr)
                    del config_dict[key]

            with config_path.open('wb') as f:
                tomli_w.dump({CONFIG_SECTION: config_dict}, f)
        except OSError as e:
            print(f"Error saving config file: {e}", file=sys.stderr)

    def get_log_file(self) -> Optional[Path]:
        """Get the path to the log file.

        If always_log is True, generates a timestamped log file name inside
        log_directory (or the current directory when that is unset or
        unsafe). Otherwise, returns the configured log_file path if set.

        Returns:
            Optional[Path]: Path to the log file, or None if logging is disabled
        """
        if self.always_log:
            timestamp = datetime.now().strftime("%Y-%m-%d_%H-%M-%S")
            directory = Path(".")
            if self.log_directory:
                if self._is_safe_path(self.log_directory):
                    directory = Path(self.log_directory)
                else:
                    print(f"Warning: Unsafe log directory '{self.log_directory}', using default", file=sys.stderr)
            return directory / f"gcr_log-{timestamp}.log"
        elif self.log_file:
            if self._is_safe_path(self.log_file):
                return Path(self.log_file)
            else:
                print(f"Warning: Unsafe log file path '{self.log_file}', using default", file=sys.stderr)
                return None
        return None

    def __init__(self, **data):
        """Initialize config with environment variable support and sanitization."""
        env_data = {}

        for field_name in _STRING_FIELDS + _BOOL_FIELDS:
            env_var = ENV_PREFIX + field_name.upper()
            if env_var not in os.environ:
                continue
            value = os.environ[env_var]

            if field_name in _STRING_FIELDS:
                value = self._sanitize_string(value)
            else:
                value = value.lower() in ['true', '1', 'yes', 'on']

            env_data[field_name] = value

        # Explicit arguments win over the environment
        merged_data = {**env_data, **data}

        super().__init__(**merged_data)
