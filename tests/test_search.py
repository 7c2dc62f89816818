import unittest

from gdrivebrowser.models import FileRef, FolderRef, ListingSnapshot
from gdrivebrowser.search import filter_listing


class TestFilterListing(unittest.TestCase):
    def setUp(self) -> None:
        self.listing = ListingSnapshot.of(
            [FolderRef("D1", "Reports 2024"), FolderRef("D2", "Photos")],
            [FileRef("F1", "Report.pdf"), FileRef("F2", "notes.txt")],
        )

    def test_blank_query_returns_same_snapshot(self) -> None:
        for query in ("", "   ", None):
            self.assertIs(filter_listing(query, self.listing), self.listing)

    def test_case_insensitive_substring(self) -> None:
        result = filter_listing("report", self.listing)
        self.assertEqual([f.name for f in result.files], ["Report.pdf"])
        self.assertEqual([f.name for f in result.folders], ["Reports 2024"])

    def test_query_is_trimmed(self) -> None:
        result = filter_listing("  NOTES ", self.listing)
        self.assertEqual([f.id for f in result.files], ["F2"])
        self.assertEqual(result.folders, ())

    def test_source_listing_untouched(self) -> None:
        filter_listing("photo", self.listing)
        self.assertEqual(len(self.listing.folders), 2)
        self.assertEqual(len(self.listing.files), 2)


if __name__ == "__main__":
    unittest.main()
