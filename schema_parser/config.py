# Copyright 2026 TIER IV, inc.
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

"""Configuration management for the schema parser."""

import os
import logging
from dataclasses import dataclass

from .utils.logging_utils import configure_split_stream_logging


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


@dataclass
class ParserConfig:
    """Configuration class for schema parsing."""
    log_level: str = "INFO"
    print_level: str = "WARNING"
    cache_enabled: bool = False
    strict: bool = True

    @classmethod
    def from_env(cls) -> 'ParserConfig':
        """Create configuration from environment variables."""
        return cls(
            log_level=os.getenv('SCHEMA_PARSER_LOG_LEVEL', 'INFO'),
            print_level=os.getenv('SCHEMA_PARSER_PRINT_LEVEL', 'WARNING'),
            cache_enabled=_env_flag('SCHEMA_PARSER_CACHE_ENABLED', 'false'),
            strict=_env_flag('SCHEMA_PARSER_STRICT', 'true'),
        )

    def set_logging(self) -> logging.Logger:
        """Setup logging based on configuration."""
        level = getattr(logging, self.log_level.upper(), logging.INFO)
        stderr_level = getattr(logging, self.print_level.upper(), logging.WARNING)

        formatter = logging.Formatter('%(name)s - %(levelname)s - %(message)s')
        configure_split_stream_logging(level=level, stderr_level=stderr_level, formatter=formatter)

        return logging.getLogger('schema_parser')


# Global configuration instance
parser_config = ParserConfig.from_env()
