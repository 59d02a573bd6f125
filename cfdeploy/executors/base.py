#!/usr/bin/env python3
"""
Base executor interface for platform operations.
"""


class BaseExecutor:
    """
    Interface for platform executors (cf CLI or dry-run).

    Every method blocks until the platform has answered and raises
    PlatformError when the operation fails.
    """

    def push(self, request):
        """
        Push an application.

        Args:
            request: PushRequest; when request.no_start is set the application
                must be left stopped
        """
        raise NotImplementedError("Subclasses must implement push()")

    def bind_service(self, app_name, instance_name):
        raise NotImplementedError("Subclasses must implement bind_service()")

    def set_environment_variable(self, app_name, key, value):
        """value is always a string."""
        raise NotImplementedError("Subclasses must implement set_environment_variable()")

    def start_application(self, app_name):
        raise NotImplementedError("Subclasses must implement start_application()")

    def list_service_instances(self):
        """Returns a list of dicts, each with at least a 'name' key."""
        raise NotImplementedError("Subclasses must implement list_service_instances()")

    def create_service_instance(self, service_name, plan_name, instance_name):
        raise NotImplementedError("Subclasses must implement create_service_instance()")

    def delete_service_instance(self, instance_name):
        raise NotImplementedError("Subclasses must implement delete_service_instance()")

    def delete_orphaned_routes(self):
        raise NotImplementedError("Subclasses must implement delete_orphaned_routes()")

    def get_application(self, app_name):
        """Returns a dict with a 'urls' list (host names, no scheme)."""
        raise NotImplementedError("Subclasses must implement get_application()")
