#!/usr/bin/env python3
"""
Manifest Validation Script
Validates application manifests for schema compliance
"""

import sys
import json
import argparse
from pathlib import Path

import jsonschema
import yaml

SCHEMA_FILE = Path(__file__).parent.parent / 'schemas' / 'manifest-schema.json'


def load_yaml(file_path):
    """Load YAML file safely."""
    try:
        with open(file_path, 'r') as f:
            return yaml.safe_load(f), None
    except yaml.YAMLError as e:
        return None, str(e)
    except OSError as e:
        return None, str(e)


def load_schema():
    with open(SCHEMA_FILE, 'r') as f:
        return json.load(f)


def _error_location(error):
    # Paths mix sequence indexes and mapping keys; never compare an int with a str
    return [(isinstance(p, str), p) for p in error.absolute_path]


def _format_error(error):
    error_path = ' -> '.join(str(p) for p in error.absolute_path) if error.absolute_path else 'root'
    return f"Schema validation failed at '{error_path}': {error.message}"


def validate_manifest_data(manifest):
    """
    Validate an already loaded manifest against the JSON schema.
    Returns (is_valid, errors_list)
    """
    if manifest is None:
        return False, ["Manifest file is empty"]

    validator = jsonschema.Draft7Validator(load_schema())
    errors = sorted(validator.iter_errors(manifest), key=_error_location)
    return len(errors) == 0, [_format_error(e) for e in errors]


def validate_manifest(manifest_file):
    """
    Validate a single manifest file.
    Returns (is_valid, errors_list)
    """
    manifest_path = Path(manifest_file)

    if not manifest_path.exists():
        return False, [f"File not found: {manifest_file}"]

    manifest, err = load_yaml(manifest_path)
    if err:
        return False, [f"YAML syntax error: {err}"]

    return validate_manifest_data(manifest)


def main():
    """Main validation entry point."""
    parser = argparse.ArgumentParser(description='Validate application manifests using JSON schema')
    parser.add_argument('--file', required=True, help='Manifest file to validate')
    args = parser.parse_args()

    print(f"\n=== MANIFEST VALIDATION ===")
    print(f"File: {args.file}\n")

    is_valid, errors = validate_manifest(args.file)

    if is_valid:
        print("[OK] Manifest is valid")
    else:
        print("[FAILED] Manifest validation failed")
        for error in errors:
            print(f"  - {error}")

    print(f"\n=== RESULT: {'PASSED' if is_valid else f'FAILED ({len(errors)} errors)'} ===\n")
    sys.exit(0 if is_valid else 1)


if __name__ == '__main__':
    main()
