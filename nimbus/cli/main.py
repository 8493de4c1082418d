"""CLI entrypoint for nimbus."""
import sys
import argparse
import logging
import shutil
from pathlib import Path

from .validators import parse_headers, validate_secret_name, validate_secret_value

VERSION = "0.1.0"

logger = logging.getLogger(__name__)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(message)s",
        stream=sys.stderr
    )


def cmd_version(args):
    """Show version information."""
    print(f"nimbus {VERSION}")


def cmd_config_set_path(args):
    """Set config file path preference."""
    from nimbus.config.preferences import set_preference

    config_path = Path(args.path).resolve()

    # Validate that the path exists
    if not config_path.exists():
        print(f"Error: Config file does not exist: {config_path}", file=sys.stderr)
        sys.exit(1)

    if not config_path.is_file():
        print(f"Error: Path is not a file: {config_path}", file=sys.stderr)
        sys.exit(1)

    # Store absolute path in preferences
    set_preference("config_path", str(config_path))
    print(f"Config path set to: {config_path}")


def cmd_config_show(args):
    """Show current config file path."""
    from nimbus.config.config_loader import default_config_path
    from nimbus.config.preferences import get_preference

    config_path_pref = get_preference("config_path")

    if config_path_pref:
        config_path = Path(config_path_pref)
        if config_path.exists():
            print(f"Config path: {config_path}")
        else:
            print(f"Config path (from preference, but file not found): {config_path}")
        print("Source: preference")
        return

    # No preference set, fall back to the default location
    default_config = default_config_path()
    print(f"Config path: {default_config}")
    if default_config.exists():
        print("Source: default")
    else:
        print("Source: default (file not found)")


def cmd_config_clear(args):
    """Clear config path preference."""
    from nimbus.config.config_loader import default_config_path
    from nimbus.config.preferences import clear_preference

    clear_preference("config_path")
    print(f"Config path preference cleared. Will use default: {default_config_path()}")


def cmd_config_init(args):
    """Interactive config setup."""
    from nimbus.config.config_loader import default_config_path
    from nimbus.config.preferences import set_preference

    default_config = default_config_path()

    print("=== Nimbus Configuration Setup ===\n")
    print(f"Default config location: {default_config}\n")

    # Check if config already exists
    if default_config.exists():
        print(f"Configuration file already exists at: {default_config}")
        response = input("Do you want to use a different config file? (y/N): ").strip().lower()
        if response != 'y':
            print(f"\nUsing existing config at: {default_config}")
            return

    print("Choose an option:")
    print("1. Copy an existing config file to default location")
    print("2. Point to an existing config file at a different location")
    print("3. Cancel (manually create config file later)")

    choice = input("\nEnter choice (1-3): ").strip()

    if choice == "1":
        source = Path(input("Enter path to existing config file: ").strip()).expanduser().resolve()
        if not source.exists():
            print(f"Error: File not found: {source}", file=sys.stderr)
            sys.exit(1)

        # Create directory and copy file
        default_config.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy2(source, default_config)
        print(f"\nConfig copied to: {default_config}")
    elif choice == "2":
        config_file = Path(input("Enter path to config file: ").strip()).expanduser().resolve()
        if not config_file.exists():
            print(f"Error: File not found: {config_file}", file=sys.stderr)
            sys.exit(1)

        set_preference("config_path", str(config_file))
        print(f"\nConfig path set to: {config_file}")
    elif choice == "3":
        print("\nSetup cancelled.")
        print(f"Create your config file at: {default_config}")
        print("Or use: nimbus config set-path <path>")
    else:
        print("Invalid choice.", file=sys.stderr)
        sys.exit(2)


def cmd_secrets_get(args):
    """Get a secret value."""
    from nimbus.secrets.workflows.secret_operations import get_secret

    validate_secret_name(args.secret_name)
    value = get_secret(args.secret_name, args.project_id, version=args.version, provider=args.provider)
    text = value.decode("UTF-8", errors="replace")

    if args.quiet:
        # Quiet mode: output only value, no formatting
        print(text)
    else:
        # Verbose mode: show secret name and value
        print(f"Secret '{args.secret_name}': {text}")


def cmd_secrets_create(args):
    """Create a secret."""
    from nimbus.secrets.workflows.secret_operations import create_secret

    validate_secret_name(args.secret_name)
    validate_secret_value(args.secret_value)
    create_secret(args.secret_name, args.secret_value, args.project_id, provider=args.provider)
    print(f"Secret '{args.secret_name}' created")


def cmd_storage_upload(args):
    """Upload a local file."""
    from nimbus.storage.workflows.storage_operations import upload

    upload(args.bucket, args.key, args.path, mime=args.mime, provider=args.provider)
    print(f"Uploaded {args.path} to {args.bucket}/{args.key}")


def cmd_storage_download(args):
    """Download an object into a directory."""
    from nimbus.storage.workflows.storage_operations import download

    path = download(args.bucket, args.key, args.dest_dir, expected_type=args.expect, provider=args.provider)
    print(path)


def cmd_storage_delete(args):
    """Delete an object."""
    from nimbus.storage.workflows.storage_operations import delete

    delete(args.bucket, args.key, provider=args.provider)
    print(f"Deleted {args.bucket}/{args.key}")


def cmd_tasks_push(args):
    """Push an HTTP task."""
    from nimbus.tasks.workflows.task_operations import push_http_task

    headers = parse_headers(args.header)
    body = args.body.encode("UTF-8") if args.body is not None else None
    task = push_http_task(
        args.queue,
        args.url,
        method=args.method,
        body=body,
        headers=headers,
        task_id=args.name,
        schedule_in=args.schedule_in,
        oidc_email=args.oidc_email,
        audience=args.audience,
        view=args.view,
        project_id=args.project_id,
        location=args.location,
    )
    print(task.name)


def _add_provider_argument(parser):
    parser.add_argument(
        "--provider",
        choices=["gcp", "aws"],
        default="gcp",
        help="Cloud provider backend (default: gcp)"
    )


def build_parser():
    """Build the argument parser and return it with the group parsers used for help output."""
    parser = argparse.ArgumentParser(
        prog="nimbus",
        description="Nimbus CLI - secrets, object storage and task queues on GCP and AWS",
        epilog="""
Exit codes:
  0 - Success
  1 - Runtime error (authentication, network, secret not found, etc.)
  2 - Usage error (invalid arguments, invalid secret name format, etc.)

Environment variables:
  GCP_PROJECT  - GCP project ID (overrides config file)
  GCP_LOCATION - Cloud Tasks location (overrides config file)
  AWS_REGION   - AWS region (overrides config file)

Configuration:
  Default location: ~/.config/nimbus/config.yml
  Custom path: Set with 'nimbus config set-path <path>'
  View current: Run 'nimbus config show'
        """,
        formatter_class=argparse.RawDescriptionHelpFormatter
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log progress to stderr")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("version", help="Show version information")

    # config
    config_parser = subparsers.add_parser(
        "config",
        help="Configuration management",
        description="Manage nimbus configuration"
    )
    config_subparsers = config_parser.add_subparsers(dest="config_command")
    config_set_path_parser = config_subparsers.add_parser(
        "set-path",
        help="Set config file path",
        description="Store the absolute path to your config file in ~/.config/nimbus/preferences.json"
    )
    config_set_path_parser.add_argument("path", help="Path to config file")
    config_subparsers.add_parser("show", help="Show current config path")
    config_subparsers.add_parser("clear", help="Clear config path preference")
    config_subparsers.add_parser("init", help="Interactive config setup")

    # secrets
    secrets_parser = subparsers.add_parser(
        "secrets",
        help="Secret management operations",
        description="Read and create secrets"
    )
    secrets_subparsers = secrets_parser.add_subparsers(dest="secrets_command")

    get_parser = secrets_subparsers.add_parser("get", help="Get a secret value")
    get_parser.add_argument(
        "secret_name",
        help="Name of the secret (format: [a-zA-Z0-9_-]+, no dots or special chars)"
    )
    get_parser.add_argument("--version", help="Secret version (default: latest)")
    get_parser.add_argument(
        "--project-id",
        help="GCP project ID (auto-detected from GCP_PROJECT env var or config file if not provided)"
    )
    get_parser.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="Output only the secret value (useful for scripts)"
    )
    _add_provider_argument(get_parser)

    create_parser = secrets_subparsers.add_parser("create", help="Create a secret")
    create_parser.add_argument("secret_name", help="Name of the secret")
    create_parser.add_argument("secret_value", help="Secret value")
    create_parser.add_argument("--project-id", help="GCP project ID")
    _add_provider_argument(create_parser)

    # storage
    storage_parser = subparsers.add_parser(
        "storage",
        help="Object storage operations",
        description="Upload, download and delete objects"
    )
    storage_subparsers = storage_parser.add_subparsers(dest="storage_command")

    upload_parser = storage_subparsers.add_parser("upload", help="Upload a local file")
    upload_parser.add_argument("bucket", help="Bucket name")
    upload_parser.add_argument("key", help="Object key")
    upload_parser.add_argument("path", help="Local file to upload")
    upload_parser.add_argument("--mime", help="Content type of the object")
    _add_provider_argument(upload_parser)

    download_parser = storage_subparsers.add_parser("download", help="Download an object into a directory")
    download_parser.add_argument("bucket", help="Bucket name")
    download_parser.add_argument("key", help="Object key")
    download_parser.add_argument("dest_dir", help="Destination directory (created if missing)")
    download_parser.add_argument("--expect", help="Expected file type extension, e.g. pdf or jpg")
    _add_provider_argument(download_parser)

    delete_parser = storage_subparsers.add_parser("delete", help="Delete an object")
    delete_parser.add_argument("bucket", help="Bucket name")
    delete_parser.add_argument("key", help="Object key")
    _add_provider_argument(delete_parser)

    # tasks
    tasks_parser = subparsers.add_parser(
        "tasks",
        help="Cloud Tasks operations",
        description="Push HTTP tasks onto Cloud Tasks queues"
    )
    tasks_subparsers = tasks_parser.add_subparsers(dest="tasks_command")

    push_parser = tasks_subparsers.add_parser("push", help="Push an HTTP task")
    push_parser.add_argument("queue", help="Queue ID or full name (projects/P/locations/L/queues/Q)")
    push_parser.add_argument("url", help="Target URL")
    push_parser.add_argument("--method", default="POST", help="HTTP method (default: POST)")
    push_parser.add_argument("--body", help="Request body")
    push_parser.add_argument(
        "--header",
        action="append",
        help="Request header as 'Name: value' (repeatable)"
    )
    push_parser.add_argument("--name", help="Task ID")
    push_parser.add_argument("--schedule-in", type=float, help="Delay delivery by this many seconds")
    push_parser.add_argument("--oidc-email", help="Service account email for an OIDC token")
    push_parser.add_argument("--audience", help="OIDC token audience")
    push_parser.add_argument("--view", choices=["BASIC", "FULL"], help="Response view")
    push_parser.add_argument("--project-id", help="GCP project ID")
    push_parser.add_argument("--location", help="Queue location")

    groups = {
        "config": (config_parser, "config_command", {
            "set-path": cmd_config_set_path,
            "show": cmd_config_show,
            "clear": cmd_config_clear,
            "init": cmd_config_init,
        }),
        "secrets": (secrets_parser, "secrets_command", {
            "get": cmd_secrets_get,
            "create": cmd_secrets_create,
        }),
        "storage": (storage_parser, "storage_command", {
            "upload": cmd_storage_upload,
            "download": cmd_storage_download,
            "delete": cmd_storage_delete,
        }),
        "tasks": (tasks_parser, "tasks_command", {
            "push": cmd_tasks_push,
        }),
    }
    return parser, groups


def main(argv=None):
    """Main CLI entrypoint.

    Exit codes:
        0 - Success
        1 - Runtime errors (authentication, network, secret not found, etc.)
        2 - Usage errors (invalid arguments, invalid secret name format, etc.)
    """
    parser, groups = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    # If no command provided, show help and exit with usage error code
    if not args.command:
        parser.print_help()
        sys.exit(2)

    # Route to command handlers
    try:
        if args.command == "version":
            cmd_version(args)
            return

        group_parser, dest, handlers = groups[args.command]
        handler = handlers.get(getattr(args, dest))
        # Group given without a subcommand
        if handler is None:
            group_parser.print_help()
            sys.exit(2)
        handler(args)
    except KeyboardInterrupt:
        print("\nInterrupted", file=sys.stderr)
        sys.exit(1)
    except Exception as e:
        logger.debug("Command failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
