import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

from src.config.logger_config import logger

DEFAULT_REGISTRY_BASE_URL = "https://pypi.org"

REQUIRED_ENV_VARS: dict[str, str] = {
    "PYPI_PACKAGE_NAME": "The package name (e.g., 'terminator-py')",
    "PYPI_USERNAME": "Your PyPI username",
    "PYPI_PASSWORD": "Your PyPI password or API token",
}
PAGE_SOURCES = ("browser", "http")


class ConfigError(ValueError):
    def __init__(self, message: str, missing: tuple[str, ...] = ()) -> None:
        super().__init__(message)
        self.missing = missing


@dataclass(frozen=True)
class Settings:
    package_name: str
    username: str
    password: str = field(repr=False)
    dry_run: bool = False
    page_source: str = "browser"
    headless: bool = True
    registry_base_url: str = DEFAULT_REGISTRY_BASE_URL
    run_report_dir: Path = Path("artifacts/runs")


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def load_settings(env_file: str | Path | None = None) -> Settings:
    if load_dotenv(dotenv_path=env_file):
        logger.info("Loaded environment variables from .env file")
    else:
        logger.warning("No .env file found, using system environment variables")

    missing = tuple(name for name in REQUIRED_ENV_VARS if not (os.getenv(name) or "").strip())
    if missing:
        details = "; ".join(f"{name}: {REQUIRED_ENV_VARS[name]}" for name in missing)
        raise ConfigError(f"Missing required environment variables: {details}", missing=missing)

    page_source = (os.getenv("PAGE_SOURCE") or "browser").strip().lower()
    if page_source not in PAGE_SOURCES:
        raise ConfigError(f"Unsupported PAGE_SOURCE: {page_source}")

    return Settings(
        package_name=os.environ["PYPI_PACKAGE_NAME"].strip(),
        username=os.environ["PYPI_USERNAME"].strip(),
        password=os.environ["PYPI_PASSWORD"],
        # Only the literal "true" enables dry-run.
        dry_run=os.getenv("DRY_RUN") == "true",
        page_source=page_source,
        headless=_env_flag("HEADLESS", True),
        registry_base_url=(os.getenv("REGISTRY_BASE_URL") or DEFAULT_REGISTRY_BASE_URL).strip(),
        run_report_dir=Path(os.getenv("RUN_REPORT_DIR") or "artifacts/runs"),
    )
