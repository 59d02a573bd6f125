#!/usr/bin/env python3
"""
Translate application specifications into platform push requests.
"""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class PushRequest:
    """
    Everything the platform needs to push one application.

    no_start is set when services or environment variables still have to be
    applied after the push; the application is started once they are in place.
    """

    application: Path
    name: str = None
    buildpack: str = None
    memory: int = None
    disk_quota: int = None
    instances: int = None
    domain: str = None
    host: str = None
    no_start: bool = False


def _has_text(value):
    return value is not None and value.strip() != ''


def _first(values):
    return next(iter(values), None) if values else None


def to_push_request(application_path, spec):
    """Build the PushRequest for spec. Pure: no platform calls, no I/O."""
    if spec is None:
        raise ValueError("An application specification is required")

    return PushRequest(
        application=Path(application_path),
        name=spec.name if _has_text(spec.name) else None,
        buildpack=spec.buildpack if _has_text(spec.buildpack) else None,
        memory=spec.memory,
        disk_quota=spec.disk_quota,
        instances=spec.instances,
        domain=_first(spec.domains),
        host=_first(spec.hosts),
        no_start=bool(spec.services) or bool(spec.environment_variables),
    )
