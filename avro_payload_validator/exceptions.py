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

"""Exceptions raised for caller errors.

Payload conformance problems are never raised; they are returned as
:class:`~avro_payload_validator.walker.ValidationError` values. The classes
below signal that the schema itself, or the call, is wrong.
"""

from typing import Optional


class AvroValidatorError(Exception):
    """Base exception for avro_payload_validator errors."""
    pass


class SchemaDefinitionError(AvroValidatorError):
    """Exception raised when a schema declaration is malformed."""

    def __init__(self, message: str, schema_path: Optional[str] = None):
        if schema_path:
            message = f"{message} (schema_path={schema_path})"
        super().__init__(message)
        self.schema_path = schema_path


class RecursiveSchemaError(SchemaDefinitionError):
    """Exception raised when a record is re-entered while it is being expanded."""
    pass


class SchemaLoadError(SchemaDefinitionError):
    """Exception raised when a schema file cannot be read."""
    pass


class PayloadError(AvroValidatorError):
    """Exception raised when a payload cannot be read or is not a mapping."""
    pass
