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

"""JSON Schema validation for draft-07 and 2019-09."""

from .config import EngineConfig, ValidationOptions, engine_config
from .engine import SchemaValidator, ValidationOutcome, Violation, compile_schema, validate
from .exceptions import (
    DialectError,
    DocumentLoadError,
    MalformedSchemaError,
    SchemaEngineError,
    SchemaTooDeepError,
    UnresolvableReferenceError,
)
from .models import Dialect, SchemaNode, parse_schema
from .resolver import FileReferenceLoader, MappingReferenceLoader

__version__ = "0.1.0"

__all__ = [
    "Dialect",
    "DialectError",
    "DocumentLoadError",
    "EngineConfig",
    "FileReferenceLoader",
    "MalformedSchemaError",
    "MappingReferenceLoader",
    "SchemaEngineError",
    "SchemaNode",
    "SchemaTooDeepError",
    "SchemaValidator",
    "UnresolvableReferenceError",
    "ValidationOptions",
    "ValidationOutcome",
    "Violation",
    "compile_schema",
    "engine_config",
    "parse_schema",
    "validate",
]
