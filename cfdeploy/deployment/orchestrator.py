#!/usr/bin/env python3
"""
Cloud Foundry Deployment Orchestrator
Pushes applications from a manifest, then binds services, sets environment
variables and starts them.
"""

import sys
import argparse

from .manifest import DEFAULT_MEMORY, parse_manifest
from .push_request import to_push_request
from .retry import RetryPolicy
from .utils import load_config, print_phase
from . import marketplace
from ..config.validation import validate_manifest
from ..errors import DeploymentError
from ..executors import get_executor


def env_value(value):
    """Environment variables are sent as strings; YAML booleans keep their YAML spelling."""
    if value is None:
        return ''
    if isinstance(value, bool):
        return 'true' if value else 'false'
    return str(value)


class DeploymentService:
    """
    Coarse grained deployment operations against one platform space.

    Every platform call goes through the retry policy. Push, bind and set-env
    are safe to repeat, so re-running a failed deployment is the way to
    recover from a partially applied one.
    """

    def __init__(self, operations, retry_policy=None, config=None, token_generator=None):
        self.operations = operations
        self.config = config or {}
        self.retry_policy = retry_policy or RetryPolicy.from_config(self.config)
        self.token_generator = token_generator
        self.default_memory = (self.config.get('manifest') or {}).get('default_memory', DEFAULT_MEMORY)

    def _call(self, operation, *args):
        return self.retry_policy.call(operation, *args)

    def deploy_application(self, application_path, spec):
        """
        Push one application; bind services, set environment variables and
        start it when the push had to be deferred.

        Returns the PushRequest that was pushed.
        """
        request = to_push_request(application_path, spec)
        if request.no_start and not request.name:
            raise ValueError(f"Application at {request.application} needs a name to bind services or set environment variables")

        print(f"Pushing application {request.application} as '{request.name}'")
        self._call(self.operations.push, request)

        if not request.no_start:
            print(f"✓ Pushed and started '{request.name}'")
            return request

        for service in spec.services:
            self._call(self.operations.bind_service, request.name, service)
            print(f"  ✓ Bound service '{service}' to '{request.name}'")

        for key, value in spec.environment_variables.items():
            self._call(self.operations.set_environment_variable, request.name, key, env_value(value))
            print(f"  ✓ Set environment variable '{key}' on '{request.name}'")

        self._call(self.operations.start_application, request.name)
        print(f"✓ Pushed, configured and started '{request.name}'")
        return request

    def deploy_from_manifest(self, manifest_file):
        """
        Parse the manifest, then deploy every application in it, in order.

        The manifest is parsed completely before the first platform call, so
        an invalid manifest never leaves a partial deployment behind.
        Returns the names of the deployed applications.
        """
        deploy_manifest = parse_manifest(manifest_file, self.token_generator, self.default_memory)
        if not deploy_manifest:
            print(f"No application in {manifest_file} has a path, nothing to deploy")
            return []

        deployed = []
        for index, (application_path, spec) in enumerate(deploy_manifest.items(), start=1):
            print_phase(f"APPLICATION {index}/{len(deploy_manifest)}: {spec.name or application_path}")
            request = self.deploy_application(application_path, spec)
            deployed.append(request.name)

        return deployed

    def marketplace_service_exists(self, instance_name):
        return marketplace.service_exists(self.operations, instance_name, self.retry_policy)

    def create_marketplace_service(self, service_name, plan_name, instance_name):
        marketplace.create_service(self.operations, service_name, plan_name, instance_name, self.retry_policy)

    def ensure_marketplace_service(self, service_name, plan_name, instance_name):
        return marketplace.create_service_if_missing(
            self.operations, service_name, plan_name, instance_name, self.retry_policy
        )

    def destroy_marketplace_service(self, instance_name):
        return marketplace.destroy_service(self.operations, instance_name, self.retry_policy)

    def application_url(self, app_name, https=False):
        return marketplace.application_url(self.operations, app_name, https, self.retry_policy)

    def delete_orphaned_routes(self):
        marketplace.delete_orphaned_routes(self.operations, self.retry_policy)


def validate_command(manifest_file):
    """Validate a manifest without touching the platform."""
    print_phase("VALIDATING MANIFEST")
    is_valid, errors = validate_manifest(manifest_file)
    if not is_valid:
        print("Manifest validation failed:")
        for error in errors:
            print(f"  - {error}")
        sys.exit(1)
    print("[OK] Manifest validation successful")


def deploy_command(service, manifest_file):
    print_phase(f"DEPLOYMENT ({manifest_file})")
    deployed = service.deploy_from_manifest(manifest_file)
    print("=" * 60)
    print(f"DEPLOYMENT COMPLETE: {', '.join(str(name) for name in deployed) or 'nothing deployed'}")
    print("=" * 60)


def delete_service_command(service, instance_name):
    if service.destroy_marketplace_service(instance_name):
        print(f"✓ Service instance '{instance_name}' destroyed")
    else:
        print(f"✗ ERROR: Service instance '{instance_name}' still exists")
        sys.exit(1)


def build_service(config_file=None, dry_run=False):
    config = load_config(config_file)
    executor = get_executor(config, dry_run=dry_run)
    return DeploymentService(executor, config=config)


def main(argv=None):
    """Main entry point - parse command line and run the command."""
    parser = argparse.ArgumentParser(
        description='Cloud Foundry Deployment Orchestrator',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Push every application in a manifest
  cfdeploy deploy --manifest manifest.yml

  # Print the platform operations without running them
  cfdeploy deploy --manifest manifest.yml --dry-run

  # Marketplace services
  cfdeploy create-service --service p-mysql --plan 100mb --instance reservations-mysql
  cfdeploy delete-service --instance reservations-mysql

  # Routes
  cfdeploy url --app reservation-service --https
  cfdeploy delete-orphaned-routes
        """
    )
    parser.add_argument('command', choices=['deploy', 'validate', 'create-service', 'delete-service', 'url', 'delete-orphaned-routes'], help='Deployment command')
    parser.add_argument('--manifest', help='Manifest file path (e.g., manifest.yml)')
    parser.add_argument('--service', help='Marketplace service name (e.g., p-mysql)')
    parser.add_argument('--plan', help='Marketplace service plan (e.g., 100mb)')
    parser.add_argument('--instance', help='Service instance name')
    parser.add_argument('--app', help='Application name')
    parser.add_argument('--https', action='store_true', help='Use https:// for the application URL')
    parser.add_argument('--config', help='Deployment config file (defaults to the packaged deployment-config.yaml)')
    parser.add_argument('--dry-run', action='store_true', help='Print platform operations instead of running them')
    args = parser.parse_args(argv)

    # Validate required arguments for each command
    if args.command in ['deploy', 'validate'] and not args.manifest:
        parser.error(f"{args.command} requires --manifest argument")
    if args.command == 'create-service' and not (args.service and args.plan and args.instance):
        parser.error("create-service requires --service, --plan and --instance arguments")
    if args.command == 'delete-service' and not args.instance:
        parser.error("delete-service requires --instance argument")
    if args.command == 'url' and not args.app:
        parser.error("url requires --app argument")

    if args.command == 'validate':
        validate_command(args.manifest)
        return

    try:
        service = build_service(args.config, args.dry_run)

        if args.command == 'deploy':
            deploy_command(service, args.manifest)
        elif args.command == 'create-service':
            service.ensure_marketplace_service(args.service, args.plan, args.instance)
        elif args.command == 'delete-service':
            delete_service_command(service, args.instance)
        elif args.command == 'url':
            print(service.application_url(args.app, args.https))
        elif args.command == 'delete-orphaned-routes':
            service.delete_orphaned_routes()
    except (DeploymentError, OSError, ValueError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == '__main__':
    main()
