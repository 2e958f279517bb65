import unittest

from src.release_cleanup.domain.errors import ExtractionEmpty
from src.release_cleanup.domain.extractor import (
    extract_versions,
    extract_versions_with_strategy,
    snapshot_from_html,
)
from src.release_cleanup.domain.models import PageSnapshot

MANAGE_PAGE_HTML = """
<html>
  <head><script>var build = "9.9.9";</script></head>
  <body>
    <h1>Releases (3)</h1>
    <table class="table--releases">
      <tr class="release-row"><td>2.0.0</td><td>Jan 3, 2024</td></tr>
      <tr class="release-row"><td>1.5.10</td><td>Jan 2, 2024</td></tr>
      <tr class="release-row"><td>1.5.3</td><td>Jan 1, 2024</td></tr>
    </table>
    <footer>Status 4.5.6 | Copyright 2024</footer>
  </body>
</html>
"""


class VersionExtractorTests(unittest.TestCase):
    def test_plain_text_match_has_raw_and_fields(self):
        versions = extract_versions("Latest release is 2.1.0, published today")
        token = next(t for t in versions if t.raw == "2.1.0")
        self.assertEqual(token.fields, (2, 1, 0))

    def test_repeated_version_collapses_to_one_entry(self):
        versions = extract_versions("1.0.0 then 1.0.0 and again 1.0.0")
        self.assertEqual(len(versions), 1)
        self.assertIn("1.0.0", versions)

    def test_suffixes_are_kept_in_raw(self):
        versions = extract_versions("3.0.0-rc1 2.9.1.post2 2.9.0a1")
        self.assertEqual(versions.raws, ("3.0.0-rc1", "2.9.1.post2", "2.9.0a1"))

    def test_text_without_three_part_versions_raises(self):
        with self.assertRaises(ExtractionEmpty):
            extract_versions("Version 1.2 released on 2024-01-01, build 42")

    def test_empty_text_raises(self):
        with self.assertRaises(ExtractionEmpty):
            extract_versions("")

    def test_discovery_order_is_preserved(self):
        versions = extract_versions("Release 3.2.1 Release 3.2.0 Release 3.3.0")
        self.assertEqual(versions.raws, ("3.2.1", "3.2.0", "3.3.0"))

    def test_fragment_sequence_is_scanned_per_fragment(self):
        versions = extract_versions(["Release 1.0.0 and 1.1.0", "nothing here", "Release 0.9.0"])
        self.assertEqual(versions.raws, ("1.0.0", "1.1.0", "0.9.0"))

    def test_release_fragments_take_priority_over_full_text(self):
        snapshot = PageSnapshot(
            release_fragments=("1.2.3 uploaded 2024", "no version"),
            heading_fragments=("4.5.6",),
            full_text="1.2.3 4.5.6 7.8.9",
        )
        strategy, versions = extract_versions_with_strategy(snapshot)
        self.assertEqual(strategy, "release_fragments")
        self.assertEqual(versions.raws, ("1.2.3",))

    def test_only_first_match_per_release_fragment(self):
        snapshot = PageSnapshot(release_fragments=("1.2.3 requires 0.1.0",))
        self.assertEqual(extract_versions(snapshot).raws, ("1.2.3",))

    def test_headings_used_when_no_release_fragments_match(self):
        snapshot = PageSnapshot(
            release_fragments=("Options",),
            heading_fragments=("my-package 0.2.0", "Navigation"),
            full_text="my-package 0.2.0 docs 5.5.5",
        )
        strategy, versions = extract_versions_with_strategy(snapshot)
        self.assertEqual(strategy, "heading_fragments")
        self.assertEqual(versions.raws, ("0.2.0",))

    def test_full_text_is_last_resort(self):
        snapshot = PageSnapshot(full_text="a 0.1.0 b 0.2.0")
        strategy, versions = extract_versions_with_strategy(snapshot)
        self.assertEqual(strategy, "full_text")
        self.assertEqual(versions.raws, ("0.1.0", "0.2.0"))

    def test_cjk_prefix_does_not_hide_version(self):
        self.assertEqual(extract_versions("版本1.2.3").raws, ("1.2.3",))

    def test_non_ascii_letters_are_not_absorbed_into_suffix(self):
        self.assertEqual(extract_versions("1.2.3发布 1.0.0").raws, ("1.2.3", "1.0.0"))
        self.assertEqual(extract_versions("1.2.3é").raws, ("1.2.3",))

    def test_full_width_digits_are_not_versions(self):
        with self.assertRaises(ExtractionEmpty):
            extract_versions("１.２.３")


class SnapshotFromHtmlTests(unittest.TestCase):
    def test_release_rows_are_collected_and_scripts_ignored(self):
        snapshot = snapshot_from_html(MANAGE_PAGE_HTML)
        self.assertIn("2.0.0 Jan 3, 2024", snapshot.release_fragments)
        self.assertNotIn("9.9.9", snapshot.full_text)

    def test_release_rows_win_over_footer_text(self):
        versions = extract_versions(snapshot_from_html(MANAGE_PAGE_HTML))
        self.assertEqual(set(versions.raws), {"2.0.0", "1.5.10", "1.5.3"})

    def test_project_links_and_headings(self):
        html = """
        <body>
          <h2>Release history</h2>
          <a href="/project/demo/0.3.1/">demo 0.3.1</a>
          <a href="/project/demo/0.3.0/">demo 0.3.0</a>
          <p>Python 3.12.1 supported</p>
        </body>
        """
        strategy, versions = extract_versions_with_strategy(snapshot_from_html(html))
        self.assertEqual(strategy, "heading_fragments")
        self.assertEqual(versions.raws, ("0.3.1", "0.3.0"))

    def test_unstructured_page_falls_back_to_body_text(self):
        html = "<body><div><span>v</span> 1.0.0 <em>and</em> 1.0.1</div></body>"
        strategy, versions = extract_versions_with_strategy(snapshot_from_html(html))
        self.assertEqual(strategy, "full_text")
        self.assertEqual(versions.raws, ("1.0.0", "1.0.1"))
