#!/usr/bin/env python3
"""
Manifest parsing.

Reads a manifest.yml and turns every application block that has a ``path``
into an ApplicationSpecification keyed by the resolved artifact path.
"""

import os
import re
import uuid
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType

import yaml

from ..config.validation import validate_manifest_data
from ..errors import ParseError

RANDOM_WORD = '${random-word}'
DEFAULT_MEMORY = 1024

_QUANTITY = re.compile(r'^\s*(\d+)\s*([MG])?B?\s*$', re.IGNORECASE)


@dataclass(frozen=True)
class ApplicationSpecification:
    """One application block of a manifest. Sizes are in megabytes."""

    name: str = None
    buildpack: str = None
    memory: int = None
    disk_quota: int = None
    domains: tuple = ()
    hosts: tuple = ()
    instances: int = None
    services: tuple = ()
    environment_variables: dict = field(default_factory=dict)
    path: Path = None

    def __post_init__(self):
        # Read-only view over a private copy
        object.__setattr__(self, 'environment_variables', MappingProxyType(dict(self.environment_variables)))


def random_token():
    return str(uuid.uuid4())


def parse_quantity(value):
    """
    Convert a memory/disk quantity to megabytes.

    Accepts ints (megabytes) and strings like '512', '512M', '512MB', '1G'.
    Returns None when the value cannot be parsed.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value

    match = _QUANTITY.match(str(value))
    if not match:
        return None

    amount = int(match.group(1))
    if (match.group(2) or 'M').upper() == 'G':
        amount *= 1024
    return amount


def _as_tuple(value):
    """A single string or a sequence of strings, as an ordered de-duplicated tuple."""
    if value is None:
        return ()
    if isinstance(value, str):
        value = [value]
    return tuple(dict.fromkeys(value))


def _expand_host(host, token_generator):
    if RANDOM_WORD in host:
        return host.replace(RANDOM_WORD, token_generator())
    return host


def _read_manifest(manifest_file):
    # OSError propagates: a missing manifest is not a parse failure
    with open(manifest_file, 'r') as f:
        content = f.read()

    try:
        manifest = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ParseError(f"Invalid manifest {manifest_file}", [f"YAML syntax error: {e}"])

    is_valid, errors = validate_manifest_data(manifest)
    if not is_valid:
        raise ParseError(f"Invalid manifest {manifest_file}", errors)

    return manifest


def application_specification(block, base_dir, token_generator=random_token, default_memory=DEFAULT_MEMORY):
    """Build an ApplicationSpecification from one application block."""
    host = block.get('host')
    path = block.get('path')
    memory = parse_quantity(block['memory']) if 'memory' in block else None

    return ApplicationSpecification(
        name=block.get('name'),
        buildpack=block.get('buildpack'),
        memory=memory if memory is not None else default_memory,
        disk_quota=parse_quantity(block['disk']) if 'disk' in block else None,
        domains=_as_tuple(block.get('domains')),
        hosts=(_expand_host(host, token_generator),) if host else (),
        instances=block.get('instances'),
        services=_as_tuple(block.get('services')),
        environment_variables=dict(block.get('env') or {}),
        path=Path(os.path.abspath(base_dir / path)) if path else None,
    )


def parse_manifest(manifest_file, token_generator=None, default_memory=DEFAULT_MEMORY):
    """
    Parse a manifest into {artifact path: ApplicationSpecification}.

    Every block under ``applications`` is read; blocks without a ``path`` are
    skipped. The ``${random-word}`` placeholder in ``host`` is replaced with a
    fresh token from token_generator on every call.

    Raises:
        ParseError: the manifest is not valid YAML or does not match the schema
            or a block with services or env has no name
        OSError: the manifest cannot be read
    """
    manifest_path = Path(manifest_file)
    print(f"manifest: {manifest_path.absolute()}")

    manifest = _read_manifest(manifest_path)
    base_dir = manifest_path.absolute().parent
    token_generator = token_generator or random_token

    deploy_manifest = {}
    for index, block in enumerate(manifest['applications']):
        spec = application_specification(block, base_dir, token_generator, default_memory)
        if spec.path is None:
            continue
        if (spec.services or spec.environment_variables) and not (spec.name or '').strip():
            raise ParseError(
                f"Invalid manifest {manifest_file}",
                [f"applications -> {index}: services and env need an application name"],
            )
        if spec.path in deploy_manifest:
            raise ParseError(
                f"Invalid manifest {manifest_file}",
                [f"applications -> {index}: path {spec.path} is already used by another application"],
            )
        deploy_manifest[spec.path] = spec

    return deploy_manifest
