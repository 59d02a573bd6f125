#!/usr/bin/env python3
"""
cf CLI executor for platform operations.

Runs the cf command line client with subprocess. The CLI must already be
logged in and targeting the org/space to deploy to. Platform queries are
scoped to the targeted space.
"""

import json
import re
import subprocess
import tempfile
from pathlib import Path
from urllib.parse import quote, urlsplit

import yaml

from .base import BaseExecutor
from ..errors import PlatformError

TRANSIENT_ERRORS = re.compile(
    r'timed? ?out|timeout|connection (refused|reset)|temporarily unavailable|'
    r'bad gateway|service unavailable|gateway timeout|\b50[234]\b',
    re.IGNORECASE
)
TARGET_SPACE = re.compile(r'^space:[ \t]*(\S.*?)[ \t]*$', re.MULTILINE)


class CfExecutor(BaseExecutor):
    """Platform executor backed by the cf CLI."""

    def __init__(self, cf_binary='cf', timeout=600, default_domain=None, space_guid=None):
        self.cf_binary = cf_binary
        self.timeout = timeout
        self.default_domain = default_domain
        self.space_guid = space_guid
        self._shared_domain_name = None

    def _run(self, operation, args, display_args=None):
        """Run a cf command and return stdout, raise PlatformError if it fails."""
        cmd = [self.cf_binary] + [str(a) for a in args]
        print(f"$ {' '.join(str(a) for a in [self.cf_binary] + list(display_args or args))}")

        try:
            result = subprocess.run(cmd, capture_output=True, text=True, timeout=self.timeout)
        except subprocess.TimeoutExpired:
            raise PlatformError(operation, f"timed out after {self.timeout}s", transient=True)
        except FileNotFoundError:
            raise PlatformError(operation, f"cf CLI not found: {self.cf_binary}")

        if result.returncode != 0:
            message = ' '.join(part.strip() for part in (result.stdout, result.stderr) if part and part.strip())
            raise PlatformError(
                operation,
                f"exit {result.returncode}: {message}",
                transient=bool(TRANSIENT_ERRORS.search(message))
            )

        return result.stdout

    def _curl(self, operation, path):
        """GET a v3 API path through `cf curl` and return the decoded JSON."""
        stdout = self._run(operation, ['curl', path])
        try:
            data = json.loads(stdout)
        except ValueError:
            raise PlatformError(operation, f"unexpected response from {path}: {stdout[:200]}")

        errors = data.get('errors') if isinstance(data, dict) else None
        if errors:
            message = '; '.join(e.get('detail') or e.get('title', 'unknown error') for e in errors)
            raise PlatformError(operation, message, transient=bool(TRANSIENT_ERRORS.search(message)))

        return data

    def _paged(self, operation, path):
        """Yield every resource of a paginated v3 listing."""
        while path:
            data = self._curl(operation, path)
            yield from data.get('resources', [])

            next_page = (data.get('pagination') or {}).get('next') or {}
            href = next_page.get('href')
            if href:
                parts = urlsplit(href)
                path = f"{parts.path}?{parts.query}" if parts.query else parts.path
            else:
                path = None

    def _target_space_guid(self):
        """GUID of the targeted space, looked up once from `cf target`."""
        if self.space_guid is None:
            match = TARGET_SPACE.search(self._run('target space', ['target']))
            if not match:
                raise PlatformError('target space', "no space targeted, use 'cf target -s SPACE'")
            guid = self._run('target space', ['space', match.group(1), '--guid']).strip()
            if not guid:
                raise PlatformError('target space', f"no guid returned for space '{match.group(1)}'")
            self.space_guid = guid
        return self.space_guid

    def _shared_domain(self):
        """First external shared domain of the platform."""
        if self._shared_domain_name is None:
            for domain in self._paged('resolve domain', '/v3/domains?per_page=5000'):
                owner = ((domain.get('relationships') or {}).get('organization') or {}).get('data')
                if owner is None and not domain.get('internal'):
                    self._shared_domain_name = domain['name']
                    break
            else:
                raise PlatformError('resolve domain', 'no shared domain available for the route')
        return self._shared_domain_name

    def _route(self, request):
        """Route for the push manifest: host (or app name) on the domain."""
        domain = request.domain or self.default_domain
        if request.host and not domain:
            domain = self._shared_domain()
        if not domain:
            return None
        return f"{request.host or request.name}.{domain}"

    def push_manifest(self, request):
        """Single application manifest handed to `cf push -f`."""
        app = {'name': request.name, 'path': str(request.application)}
        if request.buildpack:
            app['buildpacks'] = [request.buildpack]
        if request.memory is not None:
            app['memory'] = f"{request.memory}M"
        if request.disk_quota is not None:
            app['disk_quota'] = f"{request.disk_quota}M"
        if request.instances is not None:
            app['instances'] = request.instances

        route = self._route(request)
        if route:
            app['routes'] = [{'route': route}]

        return {'applications': [app]}

    def push(self, request):
        if not request.name:
            raise PlatformError('push', f"an application name is required to push {request.application}")

        with tempfile.TemporaryDirectory(prefix='cfdeploy-') as tmp_dir:
            manifest_file = Path(tmp_dir) / 'manifest.yml'
            with open(manifest_file, 'w') as f:
                yaml.safe_dump(self.push_manifest(request), f, default_flow_style=False)

            args = ['push', '-f', str(manifest_file)]
            if request.no_start:
                args.append('--no-start')
            self._run('push', args)

    def bind_service(self, app_name, instance_name):
        self._run('bind service', ['bind-service', app_name, instance_name])

    def set_environment_variable(self, app_name, key, value):
        self._run('set environment variable', ['set-env', app_name, key, value],
                  display_args=['set-env', app_name, key, '****'])

    def start_application(self, app_name):
        self._run('start', ['start', app_name])

    def list_service_instances(self):
        path = f"/v3/service_instances?space_guids={self._target_space_guid()}&per_page=5000"
        return [
            {'name': resource['name'], 'guid': resource.get('guid')}
            for resource in self._paged('list service instances', path)
        ]

    def create_service_instance(self, service_name, plan_name, instance_name):
        self._run('create service', ['create-service', service_name, plan_name, instance_name])

    def delete_service_instance(self, instance_name):
        self._run('delete service', ['delete-service', instance_name, '-f'])

    def delete_orphaned_routes(self):
        self._run('delete orphaned routes', ['delete-orphaned-routes', '-f'])

    def get_application(self, app_name):
        path = f"/v3/apps?names={quote(app_name)}&space_guids={self._target_space_guid()}"
        apps = self._curl('get application', path).get('resources', [])
        if not apps:
            raise PlatformError('get application', f"application '{app_name}' not found")

        guid = apps[0]['guid']
        routes = self._paged('get application', f"/v3/apps/{guid}/routes")
        return {'name': app_name, 'guid': guid, 'urls': [route['url'] for route in routes]}
