import os
import unittest
from pathlib import Path
from unittest.mock import patch

from src.config.settings import ConfigError, load_settings
from tests.utils.tempdir import managed_temp_dir

BASE_ENV = {
    "PYPI_PACKAGE_NAME": "demo",
    "PYPI_USERNAME": "alice",
    "PYPI_PASSWORD": "pw",
}


class LoadSettingsTests(unittest.TestCase):
    def test_reads_required_values_and_defaults(self):
        with managed_temp_dir("settings_defaults") as tmp, patch.dict(os.environ, BASE_ENV, clear=True):
            settings = load_settings(tmp / "missing.env")

        self.assertEqual(settings.package_name, "demo")
        self.assertEqual(settings.username, "alice")
        self.assertFalse(settings.dry_run)
        self.assertEqual(settings.page_source, "browser")
        self.assertTrue(settings.headless)
        self.assertEqual(settings.registry_base_url, "https://pypi.org")
        self.assertEqual(settings.run_report_dir, Path("artifacts/runs"))

    def test_missing_variables_are_all_reported(self):
        with managed_temp_dir("settings_missing") as tmp, patch.dict(os.environ, {"PYPI_USERNAME": "alice"}, clear=True):
            with self.assertRaises(ConfigError) as ctx:
                load_settings(tmp / "missing.env")

        self.assertEqual(ctx.exception.missing, ("PYPI_PACKAGE_NAME", "PYPI_PASSWORD"))

    def test_dry_run_requires_literal_true(self):
        with managed_temp_dir("settings_dry_run") as tmp:
            with patch.dict(os.environ, {**BASE_ENV, "DRY_RUN": "true"}, clear=True):
                self.assertTrue(load_settings(tmp / "missing.env").dry_run)
            with patch.dict(os.environ, {**BASE_ENV, "DRY_RUN": "TRUE"}, clear=True):
                self.assertFalse(load_settings(tmp / "missing.env").dry_run)
            with patch.dict(os.environ, {**BASE_ENV, "DRY_RUN": "1"}, clear=True):
                self.assertFalse(load_settings(tmp / "missing.env").dry_run)

    def test_values_are_loaded_from_env_file(self):
        with managed_temp_dir("settings_env_file") as tmp, patch.dict(os.environ, {}, clear=True):
            env_file = tmp / ".env"
            env_file.write_text(
                "PYPI_PACKAGE_NAME=from-file\nPYPI_USERNAME=bob\nPYPI_PASSWORD=pw\nPAGE_SOURCE=http\nHEADLESS=false\n",
                encoding="utf-8",
            )
            settings = load_settings(env_file)

        self.assertEqual(settings.package_name, "from-file")
        self.assertEqual(settings.page_source, "http")
        self.assertFalse(settings.headless)

    def test_unknown_page_source_is_rejected(self):
        with managed_temp_dir("settings_page_source") as tmp, patch.dict(
            os.environ, {**BASE_ENV, "PAGE_SOURCE": "carrier-pigeon"}, clear=True
        ):
            with self.assertRaisesRegex(ConfigError, "Unsupported PAGE_SOURCE"):
                load_settings(tmp / "missing.env")
