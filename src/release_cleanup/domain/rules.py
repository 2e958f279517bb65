from urllib.parse import quote

from pathvalidate import sanitize_filename as lib_sanitize

DEFAULT_REGISTRY_BASE_URL = "https://pypi.org"


def sanitize_filename(name: str) -> str:
    safe_name = lib_sanitize(name, replacement_text="_")
    if not safe_name:
        return "untitled"
    return safe_name


def build_manage_url(package_name: str, base_url: str = DEFAULT_REGISTRY_BASE_URL) -> str:
    return f"{base_url.rstrip('/')}/manage/project/{quote(package_name.strip())}/releases/"


def build_history_url(package_name: str, base_url: str = DEFAULT_REGISTRY_BASE_URL) -> str:
    return f"{base_url.rstrip('/')}/project/{quote(package_name.strip())}/#history"


def make_report_filename(package_name: str, run_id: str) -> str:
    return f"{sanitize_filename(package_name)}_{run_id}.json"
