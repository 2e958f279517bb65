import argparse
import sys
from dataclasses import replace

from pydantic import ValidationError

from src.config.logger_config import logger
from src.config.settings import REQUIRED_ENV_VARS, ConfigError, Settings, load_settings
from src.release_cleanup.application.contracts import WorkflowResult
from src.release_cleanup.cleanup import run_cleanup
from src.release_cleanup.domain.errors import ReleaseCleanupError

RULE = "=" * 60


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="python -m src.release_cleanup",
        description="Delete the oldest release of a PyPI package through the web UI.",
    )
    parser.add_argument("--env-file", default=None, help="Path to a .env file (default: ./.env)")
    parser.add_argument("--dry-run", action="store_true", help="Identify the oldest version without deleting it")
    parser.add_argument("--no-progress", action="store_true", help="Hide the step progress bar")
    return parser.parse_args(argv)


def print_banner(settings: Settings) -> None:
    print(f"Package: {settings.package_name}")
    print(f"Username: {settings.username}")
    print(f"Password: {'*' * len(settings.password)}")
    if settings.dry_run:
        print("Dry run mode: Will identify version but NOT delete")
    print()


def print_result(result: WorkflowResult, settings: Settings) -> None:
    state = result.state
    print("\n" + RULE)
    print("Workflow Result:")
    print(RULE)
    print(f"Status: {result.status}")
    if result.ok:
        print("Workflow completed successfully!")
        print("\nFinal State:")
        print(f"   Package: {state.get('package_name') or settings.package_name}")
        print(f"   Total Versions Found: {state.get('total_versions', 'N/A')}")
        print(f"   Oldest Version: {state.get('oldest_version', 'N/A')}")
        if not settings.dry_run and state.get("deleted_version"):
            print(f"   Deleted Version: {state['deleted_version']}")
            print(f"   Deletion Time: {state.get('deletion_timestamp', 'N/A')}")
        all_versions = state.get("all_versions") or []
        if all_versions:
            print(f"\n   All Versions (sorted): {', '.join(all_versions)}")
    else:
        print("Workflow failed!")
        if result.error:
            print(f"   Error: {result.error}")
    print(RULE + "\n")


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    try:
        settings = load_settings(args.env_file)
    except ConfigError as exc:
        print("Missing or invalid configuration:", file=sys.stderr)
        for name in exc.missing:
            print(f"   - {name}: {REQUIRED_ENV_VARS[name]}", file=sys.stderr)
        if not exc.missing:
            print(f"   {exc}", file=sys.stderr)
        print("\nExample usage:", file=sys.stderr)
        print("   export PYPI_PACKAGE_NAME='your-package'", file=sys.stderr)
        print("   export PYPI_USERNAME='your-username'", file=sys.stderr)
        print("   export PYPI_PASSWORD='your-password'", file=sys.stderr)
        print("   python -m src.release_cleanup", file=sys.stderr)
        return 1

    if args.dry_run:
        settings = replace(settings, dry_run=True)

    print("Starting Delete Oldest PyPI Version Workflow...\n")
    print_banner(settings)
    try:
        result = run_cleanup(settings, show_progress=not args.no_progress)
    except (ValidationError, ValueError, ReleaseCleanupError) as exc:
        logger.exception("Workflow execution failed: {}", exc)
        print(f"\nWorkflow execution failed:\n   {exc}", file=sys.stderr)
        return 1

    print_result(result, settings)
    return 0 if result.ok else 1


# python -m src.release_cleanup
if __name__ == "__main__":
    sys.exit(main())
