import unittest

from src.release_cleanup.domain.rules import build_history_url, build_manage_url, make_report_filename


class RulesTests(unittest.TestCase):
    def test_manage_url(self):
        self.assertEqual(
            build_manage_url("terminator-py"),
            "https://pypi.org/manage/project/terminator-py/releases/",
        )

    def test_manage_url_with_custom_base(self):
        self.assertEqual(
            build_manage_url("demo", "https://test.pypi.org/"),
            "https://test.pypi.org/manage/project/demo/releases/",
        )

    def test_history_url(self):
        self.assertEqual(build_history_url("demo"), "https://pypi.org/project/demo/#history")

    def test_report_filename_is_sanitized(self):
        self.assertEqual(make_report_filename("a/b", "run_1"), "a_b_run_1.json")
