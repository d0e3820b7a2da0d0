"""Configuration management for git-smart-lint."""
from pathlib import Path
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field
import tomli
import tomli_w
import os
import re

from .models import CommitType

DEFAULT_CONFIG_FILENAME = ".gitsmartlint.toml"
CONFIG_SECTION = "gitsmartlint"

ENV_MAPPING = {
    'GIT_SMART_LINT_STRICT': 'strict',
    'GIT_SMART_LINT_AUTO_FIX': 'auto_fix',
    'GIT_SMART_LINT_DEFAULT_TYPE': 'default_type',
    'GIT_SMART_LINT_ALWAYS_LOG': 'always_log',
    'GIT_SMART_LINT_LOG_FILE': 'log_file',
}

STRING_FIELDS = ['default_type', 'log_file']
BOOL_FIELDS = ['strict', 'auto_fix', 'always_log']


class Config(BaseModel):
    """Configuration settings for git-smart-lint.

    Only the behaviour of the command line tool is configurable. The rules
    and their thresholds are fixed.
    """

    strict: bool = Field(
        default=False,
        description="Whether warnings should fail the lint as well as errors"
    )

    auto_fix: bool = Field(
        default=False,
        description="Whether to apply available fixes without --fix"
    )

    default_type: Optional[CommitType] = Field(
        default=None,
        description="Commit type to use when a fix needs one and none was chosen"
    )

    always_log: bool = Field(
        default=False,
        description="Whether to always generate log files"
    )

    log_file: Optional[str] = Field(
        default=None,
        description="Path to log file (if not using automatic log file generation)"
    )

    @staticmethod
    def _sanitize_string(value: str) -> str:
        """Strip control characters and surrounding whitespace."""
        if not value:
            return value

        value = re.sub(r'[\x00-\x08\x0B\x0C\x0E-\x1F\x7F]', '', value)

        if len(value) > 1000:
            value = value[:1000]

        return value.strip()

    @staticmethod
    def _normalize_type(value: str) -> Optional[str]:
        """Lowercase a commit type name, or return None if it is not a known type."""
        value = value.lower()
        if value not in [commit_type.value for commit_type in CommitType]:
            print(f"Warning: Unknown commit type '{value}', ignoring default_type")
            return None
        return value

    @staticmethod
    def _is_safe_path(path: str) -> bool:
        """Check if a path is safe (no path traversal)."""
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

        Keys may live at the top level or under a ``[gitsmartlint]`` table.

        Args:
            repo_path: Directory containing the config file

        Returns:
            Config: Configuration object with values from file or defaults
        """
        config_path = repo_path / DEFAULT_CONFIG_FILENAME

        if not config_path.exists():
            return cls()

        try:
            with config_path.open('rb') as f:
                config_data = tomli.load(f)

            config_section = config_data.get(CONFIG_SECTION, config_data)

            for key in STRING_FIELDS:
                if key in config_section and isinstance(config_section[key], str):
                    config_section[key] = cls._sanitize_string(config_section[key])

            if config_section.get('log_file'):
                if not cls._is_safe_path(config_section['log_file']):
                    print(f"Warning: Unsafe log file path '{config_section['log_file']}', using default")
                    config_section['log_file'] = None

            fields = {k: v for k, v in config_section.items() if k in cls.model_fields}
            return cls(**fields)
        except Exception as e:
            # If there's any error reading the config, use defaults
            print(f"Warning: Error reading config file: {e}")
            return cls()

    def save(self, repo_path: Path) -> None:
        """Save configuration to the config file.

        Args:
            repo_path: Directory to write the config file into
        """
        config_path = repo_path / DEFAULT_CONFIG_FILENAME

        try:
            # TOML has no null, so unset values are left out
            config_dict = {k: v for k, v in self.model_dump(mode='json').items() if v is not None}

            if config_dict.get('log_file') and not self._is_safe_path(config_dict['log_file']):
                print(f"Warning: Unsafe log file path '{config_dict['log_file']}', not saving")
                del config_dict['log_file']

            with config_path.open('wb') as f:
                tomli_w.dump({CONFIG_SECTION: config_dict}, f)
        except OSError as e:
            print(f"Error saving config file: {e}")

    def get_log_file(self) -> Optional[Path]:
        """Get the path to the log file.

        If always_log is True, generates a timestamped log file name.
        Otherwise, returns the configured log_file path if set.

        Returns:
            Optional[Path]: Path to the log file, or None if logging is disabled
        """
        if self.always_log:
            timestamp = datetime.now().strftime("%Y-%m-%d_%H-%M-%S")
            return Path(f"gsl_log-{timestamp}.log")
        elif self.log_file:
            if self._is_safe_path(self.log_file):
                return Path(self.log_file)
            else:
                print(f"Warning: Unsafe log file path '{self.log_file}', using default")
                return None
        return None

    def __init__(self, **data):
        """Initialize config with environment variable support and sanitization."""
        env_data = {}

        for env_var, field_name in ENV_MAPPING.items():
            if env_var in os.environ:
                value = os.environ[env_var]

                if field_name in STRING_FIELDS:
                    value = self._sanitize_string(value) or None

                if field_name in BOOL_FIELDS:
                    value = value.lower() in ['true', '1', 'yes', 'on']

                env_data[field_name] = value

        # Explicit arguments win over the environment
        merged_data = {**env_data, **data}

        if isinstance(merged_data.get('default_type'), str) and not isinstance(
            merged_data['default_type'], CommitType
        ):
            merged_data['default_type'] = self._normalize_type(merged_data['default_type'])

        super().__init__(**merged_data)
