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

"""Per-instance reporting for the command line validator."""

from pathlib import Path
from typing import Any, Dict, List, Optional

from .engine.outcome import Violation
from .file_io.source_location import lookup_source


class InstanceReport:
    """Container for the validation result of a single instance file."""

    def __init__(self, file_path: Path):
        """Initialize the report.

        Args:
            file_path: Path to the instance document
        """
        self.file_path = file_path
        self.errors: List[Dict[str, Any]] = []

    @property
    def valid(self) -> bool:
        return not self.errors

    def add_error(
        self,
        message: str,
        line: Optional[int] = None,
        column: Optional[int] = None,
        instance_path: Optional[str] = None,
        schema_path: Optional[str] = None,
        keyword: Optional[str] = None,
    ):
        """Add an error message.

        Args:
            message: Error message
            line: Optional 1-based line of the offending value
            column: Optional 1-based column of the offending value
        """
        error: Dict[str, Any] = {'message': message}
        if line is not None:
            error['line'] = line
        if column is not None:
            error['column'] = column
        if instance_path is not None:
            error['instance_path'] = instance_path
        if schema_path is not None:
            error['schema_path'] = schema_path
        if keyword is not None:
            error['keyword'] = keyword
        self.errors.append(error)

    def add_violation(self, violation: Violation, source_map: Optional[Dict[str, Dict[str, int]]] = None):
        """Add a violation, locating it in the instance source when possible."""
        location = lookup_source(source_map, violation.instance_path, self.file_path)
        self.add_error(
            violation.message,
            line=location.line,
            column=location.column,
            instance_path=violation.instance_path,
            schema_path=violation.schema_path,
            keyword=violation.keyword,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'file': str(self.file_path),
            'valid': self.valid,
            'errors': self.errors,
        }
