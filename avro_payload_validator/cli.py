#!/usr/bin/env python3
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

"""CLI entry point for validating payload files against an Avro schema."""

import argparse
import logging
import sys
from pathlib import Path
from typing import List

from .config import validator_config
from .exceptions import AvroValidatorError, SchemaDefinitionError
from .parsing.payload_parser import load_payload_with_source
from .report import FORMATTERS, PayloadReport
from .schema.loader import load_schema
from .validator import CompiledSchema, compile_schema, validate_payload

logger = logging.getLogger(__name__)

PAYLOAD_EXTENSIONS = ('.json', '.yaml', '.yml')


def find_payload_files(paths: List[str]) -> List[Path]:
    """Expand files and directories into the payload files to validate."""
    payload_files = []

    for path_str in paths:
        path = Path(path_str)

        if not path.exists():
            logger.warning(f"Path does not exist: {path}")
            continue

        if path.is_file():
            payload_files.append(path)
        elif path.is_dir():
            for ext in PAYLOAD_EXTENSIONS:
                payload_files.extend(path.rglob(f'*{ext}'))
        else:
            logger.warning(f"Path is neither file nor directory: {path}")

    return sorted(set(payload_files))


def validate_file(schema: CompiledSchema, file_path: Path, allow_extra: bool) -> PayloadReport:
    report = PayloadReport(file_path)
    try:
        payload, source_map = load_payload_with_source(file_path)
        errors = validate_payload(schema, payload, allow_extra=allow_extra)
    except SchemaDefinitionError:
        raise
    except AvroValidatorError as e:
        report.add_error(f"Failed to validate payload: {e}")
        return report

    report.add_validation_errors(errors, source_map)
    return report


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='avro-payload-validator',
        description='Validate JSON/YAML payloads against an Avro record schema',
    )
    parser.add_argument('schema', help='Path to the .avsc schema file')
    parser.add_argument('payloads', nargs='+', help='Payload files or directories to validate')
    parser.add_argument(
        '--format',
        choices=sorted(FORMATTERS),
        default='human',
        help='Output format (default: human)',
    )
    parser.add_argument(
        '--strict',
        action='store_true',
        default=not validator_config.allow_extra,
        help='Also report payload keys the schema does not declare',
    )
    parser.add_argument('--log-level', default=None, help='Logging level (default: from environment)')
    return parser


def main(argv: List[str] | None = None) -> None:
    """Main entry point for the validator CLI."""
    args = build_parser().parse_args(argv)

    if args.log_level:
        validator_config.log_level = args.log_level
    validator_config.set_logging()

    try:
        schema = compile_schema(load_schema(args.schema))
    except SchemaDefinitionError as e:
        print(f"Invalid schema {args.schema}: {e}", file=sys.stderr)
        sys.exit(2)

    payload_files = find_payload_files(args.payloads)
    if not payload_files:
        print("No payload files found.", file=sys.stderr)
        sys.exit(1)

    try:
        reports = [validate_file(schema, path, allow_extra=not args.strict) for path in payload_files]
    except SchemaDefinitionError as e:
        print(f"Invalid schema {args.schema}: {e}", file=sys.stderr)
        sys.exit(2)

    output = FORMATTERS[args.format](reports)
    if output:
        print(output)

    # Exit with error code if any errors found
    if any(not r.ok for r in reports):
        sys.exit(1)
    if args.format == 'human':
        print(f"Validated {len(reports)} payload file(s) with no errors.")
    sys.exit(0)


if __name__ == '__main__':
    main()
