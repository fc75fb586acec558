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

"""CLI entry point for validating JSON/YAML documents against a schema."""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .config import ValidationOptions, engine_config
from .engine.validator import SchemaValidator
from .exceptions import DialectError, DocumentLoadError, MalformedSchemaError, SchemaTooDeepError
from .file_io.document_loader import load_document
from .file_io.source_location import SourceLocation, format_source
from .file_io.template_renderer import TemplateRenderer
from .models.dialect import Dialect
from .report import InstanceReport
from .resolver.loaders import ChainReferenceLoader, FileReferenceLoader, MappingReferenceLoader, documents_by_id

logger = logging.getLogger(__name__)

EXIT_VALID = 0
EXIT_INVALID = 1
EXIT_SCHEMA_ERROR = 2


class FatalSchemaError(Exception):
    """The schema itself cannot be used; no instance result is meaningful."""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='json-schema-engine',
        description='Validate JSON/YAML documents against a JSON Schema (draft-07 or 2019-09)',
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument('schema', help='Schema document (.json, .yaml or .yml)')
    parser.add_argument('instances', nargs='+', help='Instance documents to validate')
    parser.add_argument(
        '--dialect',
        choices=[dialect.value for dialect in Dialect],
        default=None,
        help='Dialect to validate with (default: detect from $schema, else 2019-09)',
    )
    parser.add_argument('--assert-format', action='store_true', help='Treat "format" as an assertion')
    parser.add_argument(
        '--assert-content',
        action='store_true',
        help='Check contentEncoding/contentMediaType/contentSchema',
    )
    parser.add_argument(
        '--max-depth',
        type=int,
        default=engine_config.validation.max_depth,
        help='Maximum evaluation depth (default: %(default)s)',
    )
    parser.add_argument(
        '--refs-dir',
        type=Path,
        default=None,
        help='Directory of schema documents served to $ref by their $id',
    )
    parser.add_argument(
        '--format',
        choices=['human', 'json', 'github-actions', 'junit'],
        default='human',
        help='Output format (default: human)',
    )
    parser.add_argument('--output', type=Path, default=None, help='Write the report to this file instead of stdout')
    parser.add_argument('--log-level', default=None, help='Log level (default: from JSON_SCHEMA_ENGINE_LOG_LEVEL)')
    return parser


def build_validator(schema_path: Path, args: argparse.Namespace) -> SchemaValidator:
    """Load and compile the schema.

    Raises:
        FatalSchemaError: If the schema cannot be read or compiled
    """
    try:
        schema = load_document(schema_path).data
    except DocumentLoadError as exc:
        raise FatalSchemaError(str(exc)) from exc

    loader = FileReferenceLoader(root_dir=schema_path.resolve().parent)
    if args.refs_dir is not None:
        if not args.refs_dir.is_dir():
            raise FatalSchemaError(f"References directory does not exist: {args.refs_dir}")
        loader = ChainReferenceLoader(MappingReferenceLoader(documents_by_id(args.refs_dir)), loader)

    try:
        options = ValidationOptions(
            dialect=args.dialect,
            assert_format=args.assert_format or engine_config.validation.assert_format,
            assert_content=args.assert_content or engine_config.validation.assert_content,
            max_depth=args.max_depth,
            base_uri=schema_path.resolve().as_uri(),
        )
        return SchemaValidator(schema, options, loader=loader)
    except (MalformedSchemaError, SchemaTooDeepError, DialectError, ValueError) as exc:
        raise FatalSchemaError(f"{schema_path}: {exc}") from exc


def validate_instances(validator: SchemaValidator, instance_paths: List[Path]) -> List[InstanceReport]:
    reports = []
    for instance_path in instance_paths:
        report = InstanceReport(instance_path)
        try:
            document = load_document(instance_path)
        except DocumentLoadError as exc:
            report.add_error(str(exc))
            reports.append(report)
            continue

        try:
            outcome = validator.validate(document.data)
        except SchemaTooDeepError as exc:
            raise FatalSchemaError(f"{instance_path}: {exc}") from exc

        for violation in outcome.violations:
            report.add_violation(violation, document.source_map)
        logger.debug("%s: %d violation(s)", instance_path, len(outcome.violations))
        reports.append(report)
    return reports


def _location(report: InstanceReport, error: dict) -> str:
    return format_source(
        SourceLocation(
            file_path=report.file_path,
            instance_path=error.get('instance_path'),
            line=error.get('line'),
            column=error.get('column'),
        )
    )


def render_report(reports: List[InstanceReport], output_format: str, schema_path: Path) -> str:
    lines = []
    if output_format == 'json':
        output = {
            'schema': str(schema_path),
            'files': len(reports),
            'invalid': sum(1 for r in reports if not r.valid),
            'errors': sum(len(r.errors) for r in reports),
            'results': [r.to_dict() for r in reports],
        }
        return json.dumps(output, indent=2) + "\n"
    if output_format == 'junit':
        return TemplateRenderer().render_template(
            'junit_report.xml',
            schema_path=str(schema_path),
            reports=reports,
            failures=sum(1 for r in reports if not r.valid),
        )
    if output_format == 'github-actions':
        for report in reports:
            for error in report.errors:
                lines.append(
                    f"::error file={report.file_path},line={error.get('line', 1)},"
                    f"col={error.get('column', 1)}::{error['message']}"
                )
    else:  # human-readable
        for report in reports:
            if report.valid:
                lines.append(f"{report.file_path}: valid")
                continue
            lines.append(f"{report.file_path}: invalid")
            for error in report.errors:
                lines.append(f"  ERROR {_location(report, error)}: {error['message']}")
        invalid = sum(1 for r in reports if not r.valid)
        lines.append(f"{len(reports) - invalid} of {len(reports)} document(s) valid.")
    return "\n".join(lines) + ("\n" if lines else "")


def _emit(text: str, output: Optional[Path]) -> None:
    if output is None:
        sys.stdout.write(text)
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(text, encoding='utf-8')


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point for the validator CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.log_level:
        engine_config.log_level = args.log_level
    engine_config.set_logging()

    schema_path = Path(args.schema)
    instance_paths = [Path(p) for p in args.instances]

    try:
        validator = build_validator(schema_path, args)
        reports = validate_instances(validator, instance_paths)
    except FatalSchemaError as exc:
        print(f"Schema error: {exc}", file=sys.stderr)
        sys.exit(EXIT_SCHEMA_ERROR)

    _emit(render_report(reports, args.format, schema_path), args.output)

    if any(not r.valid for r in reports):
        sys.exit(EXIT_INVALID)
    sys.exit(EXIT_VALID)


if __name__ == '__main__':
    main()
