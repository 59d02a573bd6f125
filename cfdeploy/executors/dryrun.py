#!/usr/bin/env python3
"""
Dry-run executor for platform operations (mock mode).
"""

from .base import BaseExecutor
from ..errors import PlatformError


class DryRunExecutor(BaseExecutor):
    """
    Prints and records operations instead of running them.

    Service instances and pushed applications are tracked in memory so the
    marketplace helpers give consistent answers during a dry run.
    """

    def __init__(self, service_instances=None, applications=None, default_domain=None):
        self.calls = []
        self.service_instances = list(service_instances or [])
        self.applications = dict(applications or {})
        self.default_domain = default_domain

    def _record(self, operation, *args):
        self.calls.append((operation,) + args)
        print(f"[DRY RUN] {operation} {' '.join(str(a) for a in args)}".rstrip())

    def push(self, request):
        self._record('push', request.name, str(request.application))
        domain = request.domain or self.default_domain
        if request.host and domain:
            urls = [f"{request.host}.{domain}"]
        elif domain:
            urls = [f"{request.name}.{domain}"]
        else:
            urls = []
        self.applications[request.name] = {'urls': urls}

    def bind_service(self, app_name, instance_name):
        self._record('bind_service', app_name, instance_name)

    def set_environment_variable(self, app_name, key, value):
        self._record('set_environment_variable', app_name, key, value)

    def start_application(self, app_name):
        self._record('start_application', app_name)

    def list_service_instances(self):
        self._record('list_service_instances')
        return [{'name': name} for name in self.service_instances]

    def create_service_instance(self, service_name, plan_name, instance_name):
        self._record('create_service_instance', service_name, plan_name, instance_name)
        self.service_instances.append(instance_name)

    def delete_service_instance(self, instance_name):
        self._record('delete_service_instance', instance_name)
        self.service_instances = [name for name in self.service_instances if name != instance_name]

    def delete_orphaned_routes(self):
        self._record('delete_orphaned_routes')

    def get_application(self, app_name):
        self._record('get_application', app_name)
        if app_name not in self.applications:
            raise PlatformError('get application', f"application '{app_name}' not found")
        return self.applications[app_name]
