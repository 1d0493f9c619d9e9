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

import logging
import sys
from typing import Optional, TextIO


DEFAULT_FORMAT = "%(name)s - %(levelname)s - %(message)s"


class _BelowLevelFilter(logging.Filter):
    def __init__(self, limit: int) -> None:
        super().__init__()
        self._limit = limit

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno < self._limit


def configure_split_stream_logging(
    *,
    level: int = logging.WARNING,
    stderr_level: int = logging.ERROR,
    formatter: Optional[logging.Formatter] = None,
    stdout: Optional[TextIO] = None,
    stderr: Optional[TextIO] = None,
) -> None:
    """Configure root logging with records split by severity.

    Records below *stderr_level* go to stdout, the rest to stderr, so
    problems stay visible when stdout is redirected.
    """

    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(level)

    if formatter is None:
        formatter = logging.Formatter(DEFAULT_FORMAT)

    stderr_level = max(stderr_level, logging.DEBUG)

    low_handler = logging.StreamHandler(stream=stdout or sys.stdout)
    low_handler.setLevel(logging.DEBUG)
    low_handler.addFilter(_BelowLevelFilter(stderr_level))
    low_handler.setFormatter(formatter)

    high_handler = logging.StreamHandler(stream=stderr or sys.stderr)
    high_handler.setLevel(stderr_level)
    high_handler.setFormatter(formatter)

    root.addHandler(low_handler)
    root.addHandler(high_handler)
