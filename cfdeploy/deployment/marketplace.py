#!/usr/bin/env python3
"""
Marketplace service and route helpers.

Each helper is a single blocking platform call (or a check followed by one)
with no sequencing of its own.
"""

from .retry import NO_RETRY
from ..errors import PlatformError


def service_exists(operations, instance_name, retry_policy=NO_RETRY):
    """True when exactly one service instance is named instance_name (exact, case-sensitive)."""
    instances = retry_policy.call(operations.list_service_instances)
    matches = [si for si in instances if si.get('name') == instance_name]
    return len(matches) == 1


def create_service(operations, service_name, plan_name, instance_name, retry_policy=NO_RETRY):
    print(f"Creating service {service_name} with plan {plan_name} and instance name {instance_name}")
    retry_policy.call(operations.create_service_instance, service_name, plan_name, instance_name)


def create_service_if_missing(operations, service_name, plan_name, instance_name, retry_policy=NO_RETRY):
    """
    Create the service instance unless it already exists.

    The check and the create are separate calls: two callers racing on the
    same instance name can both see it missing. Serialize such callers.
    Returns True when the instance was created.
    """
    if service_exists(operations, instance_name, retry_policy):
        print(f"✓ Service instance '{instance_name}' already exists")
        return False

    print(f"Could not find {instance_name}, so creating it.")
    create_service(operations, service_name, plan_name, instance_name, retry_policy)
    return True


def destroy_service(operations, instance_name, retry_policy=NO_RETRY):
    """Delete the service instance. Returns True when it no longer exists afterwards."""
    print(f"Deleting service instance {instance_name}")
    retry_policy.call(operations.delete_service_instance, instance_name)
    return not service_exists(operations, instance_name, retry_policy)


def delete_orphaned_routes(operations, retry_policy=NO_RETRY):
    print("Deleting orphaned routes")
    retry_policy.call(operations.delete_orphaned_routes)


def application_url(operations, app_name, https=False, retry_policy=NO_RETRY):
    """First URL bound to app_name, with an http:// or https:// scheme."""
    app = retry_policy.call(operations.get_application, app_name)
    urls = app.get('urls') or []
    if not urls:
        raise PlatformError('get application', f"application '{app_name}' has no routes")

    scheme = 'https' if https else 'http'
    return f"{scheme}://{urls[0]}"
