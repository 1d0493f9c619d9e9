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

"""Runtime configuration for the validator and its CLI."""

import os
import logging
from dataclasses import dataclass

from .utils.logging_utils import configure_split_stream_logging

ENV_PREFIX = "AVRO_PAYLOAD_VALIDATOR_"


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(ENV_PREFIX + name, default).strip().lower() in ("1", "true", "yes", "on")


@dataclass
class ValidatorConfig:
    """Configuration for loading, validating and reporting."""
    log_level: str = "WARNING"
    print_level: str = "ERROR"
    cache_enabled: bool = True
    # When False, payload keys a record does not declare are reported
    allow_extra: bool = True

    @classmethod
    def from_env(cls) -> 'ValidatorConfig':
        """Create configuration from environment variables."""
        return cls(
            log_level=os.getenv(ENV_PREFIX + 'LOG_LEVEL', 'WARNING'),
            print_level=os.getenv(ENV_PREFIX + 'PRINT_LEVEL', 'ERROR'),
            cache_enabled=_env_flag('CACHE_ENABLED', 'true'),
            allow_extra=_env_flag('ALLOW_EXTRA', 'true'),
        )

    def set_logging(self) -> logging.Logger:
        """Setup logging based on configuration."""
        level = getattr(logging, self.log_level.upper(), logging.WARNING)
        stderr_level = getattr(logging, self.print_level.upper(), logging.ERROR)

        configure_split_stream_logging(level=level, stderr_level=stderr_level)

        return logging.getLogger('avro_payload_validator')


# Global configuration instance
validator_config = ValidatorConfig.from_env()
