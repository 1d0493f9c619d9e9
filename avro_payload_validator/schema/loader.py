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

"""Schema file loader for ``.avsc`` (JSON) declarations."""

import json
import logging
import threading
from pathlib import Path
from typing import Any, Dict, Optional, Union

from ..config import validator_config
from ..exceptions import SchemaLoadError

logger = logging.getLogger(__name__)


# Declaration cache to avoid re-reading files
_SCHEMA_CACHE: Dict[Path, Any] = {}
_CACHE_LOCK = threading.Lock()


def load_schema(file_path: Union[str, Path], cache_enabled: Optional[bool] = None) -> Any:
    """Load a raw Avro schema declaration from a JSON file.

    Args:
        file_path: Path to the ``.avsc`` / ``.json`` file
        cache_enabled: Whether to use the declaration cache. If None, uses global config.

    Returns:
        The parsed declaration (usually a dict)

    Raises:
        SchemaLoadError: If the file doesn't exist or is not valid JSON
    """
    path = Path(file_path).resolve()
    use_cache = validator_config.cache_enabled if cache_enabled is None else cache_enabled

    if use_cache:
        with _CACHE_LOCK:
            if path in _SCHEMA_CACHE:
                logger.debug(f"Loading schema from cache: {path}")
                return _SCHEMA_CACHE[path]

    if not path.is_file():
        raise SchemaLoadError(f"Schema file not found: {path}")

    try:
        logger.debug(f"Loading schema file: {path}")
        with open(path, "r", encoding="utf-8") as f:
            declaration = json.load(f)
    except json.JSONDecodeError as e:
        raise SchemaLoadError(f"Invalid JSON in schema file {path}: {e.msg} (line {e.lineno})") from e
    except OSError as e:
        raise SchemaLoadError(f"Failed to read schema file {path}: {e}") from e

    if use_cache:
        with _CACHE_LOCK:
            _SCHEMA_CACHE[path] = declaration

    return declaration


def clear_cache() -> None:
    """Clear the schema cache. Useful for testing."""
    with _CACHE_LOCK:
        _SCHEMA_CACHE.clear()
