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

"""Custom exceptions for the JSON Schema engine.

An instance that simply does not satisfy its schema is never an exception;
it is reported through :class:`~json_schema_engine.engine.outcome.ValidationOutcome`.
"""


class SchemaEngineError(Exception):
    """Base exception for schema-engine related errors."""
    pass


class MalformedSchemaError(SchemaEngineError):
    """Exception raised when a keyword value does not have its declared shape."""

    def __init__(self, keyword: str, path: str, message: str):
        self.keyword = keyword
        self.path = path
        self.message = message
        super().__init__(f"Malformed schema at '{path or '/'}' (keyword '{keyword}'): {message}")


class UnresolvableReferenceError(SchemaEngineError):
    """Exception raised when a reference has no entry in the resolution table."""

    def __init__(self, ref: str, base_uri: str, reason: str = ""):
        self.ref = ref
        self.base_uri = base_uri
        self.reason = reason
        message = f"Unresolvable reference '{ref}'"
        if base_uri:
            message += f" (base URI '{base_uri}')"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class SchemaTooDeepError(SchemaEngineError):
    """Exception raised when schema nesting or reference recursion exceeds the depth limit."""
    pass


class DialectError(SchemaEngineError):
    """Exception raised for unknown or unsupported dialect identifiers."""
    pass


class DocumentLoadError(SchemaEngineError):
    """Exception raised when a schema or instance document cannot be read or parsed."""
    pass
