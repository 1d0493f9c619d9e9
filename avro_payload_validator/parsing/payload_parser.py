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

"""Payload document loading (YAML, and therefore JSON) with source locations."""

import logging
from pathlib import Path
from typing import Any, Dict, Tuple, Union

import yaml

from ..exceptions import PayloadError
from ..paths import child, index

logger = logging.getLogger(__name__)

SourceMap = Dict[str, Dict[str, int]]


def build_source_map(content: str) -> SourceMap:
    """Map field paths (``pets[0].name``) to 1-based line/column.

    Uses PyYAML's node tree (yaml.compose) so locations are tracked without
    changing the data returned by safe_load.
    """
    source_map: SourceMap = {}

    try:
        root = yaml.compose(content, Loader=yaml.SafeLoader)
    except yaml.YAMLError:
        # Parse errors are reported by the loader itself.
        return source_map

    if root is None:
        return source_map

    def _walk(node, path: str) -> None:
        mark = getattr(node, "start_mark", None)
        if path and mark is not None:
            # PyYAML uses 0-based line/column
            source_map[path] = {"line": mark.line + 1, "column": mark.column + 1}

        if isinstance(node, yaml.nodes.MappingNode):
            for key_node, value_node in node.value:
                key = getattr(key_node, "value", None)
                if key is None:
                    continue
                _walk(value_node, child(path, str(key)))
        elif isinstance(node, yaml.nodes.SequenceNode):
            for idx, item_node in enumerate(node.value):
                _walk(item_node, index(path, idx))

    _walk(root, "")
    return source_map


def load_payload_from_string(content: str) -> Any:
    """Parse one payload document.

    Raises:
        PayloadError: If content cannot be parsed
    """
    try:
        return yaml.safe_load(content)
    except yaml.YAMLError as exc:
        raise PayloadError(f"Failed to parse payload content: {exc}") from exc


def load_payload_with_source(file_path: Union[str, Path]) -> Tuple[Any, SourceMap]:
    """Load a payload file and return (data, source_map).

    Raises:
        PayloadError: If the file cannot be read or parsed
    """
    path = Path(file_path)

    if not path.exists():
        raise PayloadError(f"Payload file not found: {path}")

    if not path.is_file():
        raise PayloadError(f"Path is not a file: {path}")

    logger.debug(f"Loading payload file: {path}")
    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise PayloadError(f"Failed to read payload file {path}: {exc}") from exc

    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as exc:
        raise PayloadError(f"Failed to parse payload file {path}: {exc}") from exc

    return data, build_source_map(content)


def load_payload(file_path: Union[str, Path]) -> Any:
    data, _ = load_payload_with_source(file_path)
    return data
