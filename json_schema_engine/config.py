# Copyright 2025 TIER IV, inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Configuration management for the schema engine."""

import os
import logging
from dataclasses import dataclass, field
from typing import Mapping, Optional

from .formats.format_checkers import FormatPredicate
from .models.dialect import Dialect, parse_dialect
from .utils.logging_utils import configure_split_stream_logging, level_from_name

DEFAULT_MAX_DEPTH = 256


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class ValidationOptions:
    """Per-call validation options.

    ``dialect`` None means "detect from the root ``$schema``". ``max_depth``
    bounds schema/instance recursion during evaluation.
    """
    dialect: Optional[str] = None
    assert_format: bool = False
    assert_content: bool = False
    max_depth: int = DEFAULT_MAX_DEPTH
    base_uri: str = ""
    formats: Mapping[str, FormatPredicate] = field(default_factory=dict, hash=False)

    def __post_init__(self):
        if self.dialect is not None:
            # fail early on typos; the stored value stays a plain string
            parse_dialect(self.dialect)
        if self.max_depth < 1:
            raise ValueError(f"max_depth must be positive, got {self.max_depth}")

    @property
    def requested_dialect(self) -> Optional[Dialect]:
        return parse_dialect(self.dialect) if self.dialect is not None else None

    @classmethod
    def from_env(cls) -> 'ValidationOptions':
        """Create options from environment variables."""
        return cls(
            dialect=os.getenv('JSON_SCHEMA_ENGINE_DIALECT') or None,
            assert_format=_env_flag('JSON_SCHEMA_ENGINE_ASSERT_FORMAT'),
            assert_content=_env_flag('JSON_SCHEMA_ENGINE_ASSERT_CONTENT'),
            max_depth=int(os.getenv('JSON_SCHEMA_ENGINE_MAX_DEPTH', str(DEFAULT_MAX_DEPTH))),
        )


@dataclass
class EngineConfig:
    """Process-wide settings: logging and document caching."""
    log_level: str = "INFO"
    print_level: str = "WARNING"
    cache_enabled: bool = True
    max_cache_size: int = 128
    validation: ValidationOptions = field(default_factory=ValidationOptions)

    @classmethod
    def from_env(cls) -> 'EngineConfig':
        """Create configuration from environment variables."""
        return cls(
            log_level=os.getenv('JSON_SCHEMA_ENGINE_LOG_LEVEL', 'INFO'),
            print_level=os.getenv('JSON_SCHEMA_ENGINE_PRINT_LEVEL', 'WARNING'),
            cache_enabled=_env_flag('JSON_SCHEMA_ENGINE_CACHE_ENABLED', 'true'),
            max_cache_size=int(os.getenv('JSON_SCHEMA_ENGINE_MAX_CACHE_SIZE', '128')),
            validation=ValidationOptions.from_env(),
        )

    def set_logging(self) -> logging.Logger:
        """Setup logging based on configuration."""
        level = level_from_name(self.log_level, logging.INFO)
        stderr_level = level_from_name(self.print_level, logging.WARNING)

        formatter = logging.Formatter('%(name)s - %(levelname)s - %(message)s')
        return configure_split_stream_logging(level=level, stderr_level=stderr_level, formatter=formatter)


# Global configuration instance
engine_config = EngineConfig.from_env()
