import random
import unittest

from gdrivebrowser.errors import ValidationError
from gdrivebrowser.models import BreadcrumbEntry, FolderRef
from gdrivebrowser.navigation import ROOT, Location, LocationModel


def _folder(i: int) -> FolderRef:
    return FolderRef(id=f"D{i}", name=f"folder-{i}")


class TestLocationModel(unittest.TestCase):
    def test_starts_at_root_with_empty_breadcrumb(self) -> None:
        model = LocationModel()
        self.assertIsNone(model.current_folder_id)
        self.assertEqual(model.breadcrumb, ())
        self.assertEqual(model.location, ROOT)
        self.assertTrue(model.location.is_root)

    def test_navigate_into_appends_and_tracks_last_entry(self) -> None:
        model = LocationModel()
        for i in range(1, 6):
            loc = model.navigate_into(_folder(i))
            self.assertEqual(loc, Location(f"D{i}"))
            self.assertEqual(model.breadcrumb[-1].id, model.current_folder_id)
        self.assertEqual([e.id for e in model.breadcrumb], ["D1", "D2", "D3", "D4", "D5"])

    def test_random_descents_keep_last_entry_equal_to_current(self) -> None:
        rng = random.Random(7)
        model = LocationModel()
        for _ in range(200):
            model.navigate_into(_folder(rng.randint(1, 50)))
            self.assertEqual(model.breadcrumb[-1].id, model.current_folder_id)

    def test_navigate_to_breadcrumb_truncates_inclusive(self) -> None:
        model = LocationModel()
        for i in range(1, 5):
            model.navigate_into(_folder(i))

        changed = model.navigate_to_breadcrumb("D2")

        self.assertTrue(changed)
        self.assertEqual(model.current_folder_id, "D2")
        self.assertEqual(
            model.breadcrumb,
            (BreadcrumbEntry("D1", "folder-1"), BreadcrumbEntry("D2", "folder-2")),
        )

    def test_navigate_to_unknown_breadcrumb_is_a_no_op(self) -> None:
        model = LocationModel()
        model.navigate_into(_folder(1))
        model.navigate_into(_folder(2))
        before = (model.location, model.breadcrumb)

        changed = model.navigate_to_breadcrumb("nope")

        self.assertFalse(changed)
        self.assertEqual((model.location, model.breadcrumb), before)

    def test_navigate_to_root_clears_everything(self) -> None:
        model = LocationModel()
        model.navigate_into(_folder(1))
        model.navigate_to_root()
        self.assertIsNone(model.current_folder_id)
        self.assertEqual(model.breadcrumb, ())

    def test_breadcrumb_is_a_copy(self) -> None:
        model = LocationModel()
        model.navigate_into(_folder(1))
        crumbs = model.breadcrumb
        model.navigate_into(_folder(2))
        self.assertEqual(len(crumbs), 1)

    def test_navigate_into_rejects_folder_without_id(self) -> None:
        model = LocationModel()
        model.navigate_into(_folder(1))

        for bad in (None, ""):
            with self.assertRaises(ValidationError):
                model.navigate_into(FolderRef(id=bad, name="broken"))

        self.assertEqual(model.current_folder_id, "D1")
        self.assertEqual([e.id for e in model.breadcrumb], ["D1"])


if __name__ == "__main__":
    unittest.main()
