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

"""Per-file validation results and their text renderings."""

import json
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from .walker import ValidationError


class PayloadReport:
    """Container for the validation results of a single payload file."""

    def __init__(self, file_path: Path):
        """Initialize the report.

        Args:
            file_path: Path to the payload file being validated
        """
        self.file_path = file_path
        self.errors: List[Dict[str, Any]] = []

    @property
    def ok(self) -> bool:
        return not self.errors

    def add_error(
        self,
        message: str,
        line: Optional[int] = None,
        column: Optional[int] = None,
        field_path: Optional[str] = None,
        code: Optional[str] = None,
    ):
        """Add an error message.

        Args:
            message: Error message
            line: Optional 1-based line number where the error occurred
            column: Optional 1-based column
            field_path: Optional payload path the error refers to
            code: Optional error kind (see ``walker``)
        """
        error: Dict[str, Any] = {'message': message}
        if line is not None:
            error['line'] = line
        if column is not None:
            error['column'] = column
        if field_path is not None:
            error['path'] = field_path
        if code is not None:
            error['code'] = code
        self.errors.append(error)

    def add_validation_errors(
        self,
        errors: Iterable[ValidationError],
        source_map: Optional[Dict[str, Dict[str, int]]] = None,
    ):
        """Add walker errors, locating each one through *source_map* when possible."""
        source_map = source_map or {}
        for error in errors:
            location = self._locate(source_map, error.path)
            self.add_error(
                error.message,
                line=location.get('line'),
                column=location.get('column'),
                field_path=error.path,
                code=error.code,
            )

    @staticmethod
    def _locate(source_map: Dict[str, Dict[str, int]], field_path: str) -> Dict[str, int]:
        # A missing field has no location of its own; fall back to its parent.
        path = field_path
        while path:
            if path in source_map:
                return source_map[path]
            cut = max(path.rfind('.'), path.rfind('['))
            path = path[:cut] if cut > 0 else ''
        return {}


def format_json(reports: List[PayloadReport]) -> str:
    output = {
        'files': len(reports),
        'errors': sum(len(r.errors) for r in reports),
        'results': [
            {
                'file': str(r.file_path),
                'errors': r.errors,
            }
            for r in reports
        ],
    }
    return json.dumps(output, indent=2)


def format_github_actions(reports: List[PayloadReport]) -> str:
    lines = []
    for report in reports:
        for error in report.errors:
            lines.append(f"::error file={report.file_path},line={error.get('line', 1)}::{error['message']}")
    return "\n".join(lines)


def format_human(reports: List[PayloadReport]) -> str:
    lines = []
    for report in reports:
        if report.ok:
            continue
        lines.append(f"\n{report.file_path}:")
        for error in report.errors:
            line_info = f":{error['line']}" if 'line' in error else ""
            lines.append(f"  ERROR{line_info}: {error['message']}")
    return "\n".join(lines)


FORMATTERS = {
    'human': format_human,
    'json': format_json,
    'github-actions': format_github_actions,
}
