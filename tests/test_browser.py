import unittest

from fakes import FakeRemote, RecordingNotifier

from gdrivebrowser.browser import DriveBrowser
from gdrivebrowser.errors import NotFoundError, SessionError
from gdrivebrowser.session import SessionContext


def _signed_in() -> SessionContext:
    session = SessionContext()
    session.login("U1", "tok", "me@example.com")
    return session


class TestDriveBrowser(unittest.IsolatedAsyncioTestCase):
    def setUp(self) -> None:
        self.remote = FakeRemote()
        self.notifier = RecordingNotifier()
        self.opened: list[str] = []
        self.browser = DriveBrowser(
            self.remote,
            _signed_in(),
            notifier=self.notifier,
            confirm=lambda prompt: True,
            opener=self.opened.append,
        )

    def test_requires_signed_in_session(self) -> None:
        with self.assertRaises(SessionError):
            DriveBrowser(self.remote, SessionContext())

    async def test_folder_lifecycle_through_trash(self) -> None:
        await self.browser.create_folder("Photos")
        photos = [f for f in self.browser.listing.folders if f.name == "Photos"]
        self.assertEqual(len(photos), 1)
        self.assertIsNone(photos[0].parent_id)

        await self.browser.delete(photos[0])
        self.assertNotIn("Photos", [f.name for f in self.browser.listing.folders])
        await self.browser.open_trash()
        self.assertIn("Photos", [f.name for f in self.browser.trash.folders])

        await self.browser.restore(photos[0])
        self.assertNotIn("Photos", [f.name for f in self.browser.trash.folders])
        self.assertIn("Photos", [f.name for f in self.browser.listing.folders])

    async def test_permanent_delete_from_trash(self) -> None:
        old = self.remote.add_file("old.log", trashed=True)
        await self.browser.open_trash()
        self.remote.calls.clear()

        await self.browser.delete_forever(old)

        self.assertEqual(self.browser.trash.files, ())
        self.assertNotIn("list_files", self.remote.call_names())
        await self.browser.open_trash()
        self.assertEqual(self.browser.trash.files, ())

    async def test_navigation_refetches_and_keeps_breadcrumb(self) -> None:
        a = self.remote.add_folder("A")
        b = self.remote.add_folder("B", a.id)
        self.remote.add_file("deep.txt", b.id)

        await self.browser.refresh()
        await self.browser.open_folder(self.browser.listing.folders[0])
        await self.browser.open_folder(self.browser.listing.folders[0])

        self.assertEqual([e.name for e in self.browser.breadcrumb], ["A", "B"])
        self.assertEqual([f.name for f in self.browser.listing.files], ["deep.txt"])

        await self.browser.go_to_breadcrumb(a.id)
        self.assertEqual(self.browser.location.current_folder_id, a.id)
        self.assertEqual([f.name for f in self.browser.listing.folders], ["B"])

        await self.browser.go_root()
        self.assertEqual(self.browser.breadcrumb, ())
        self.assertEqual([f.name for f in self.browser.listing.folders], ["A"])

    async def test_unknown_breadcrumb_fetches_nothing(self) -> None:
        a = self.remote.add_folder("A")
        await self.browser.open_folder(a)
        self.remote.calls.clear()

        await self.browser.go_to_breadcrumb("missing")

        self.assertEqual(self.remote.calls, [])
        self.assertEqual(self.browser.location.current_folder_id, a.id)

    async def test_search_is_a_projection(self) -> None:
        self.remote.add_file("Report.pdf")
        self.remote.add_file("notes.txt")
        await self.browser.refresh()

        visible = self.browser.search("report")

        self.assertEqual([f.name for f in visible.files], ["Report.pdf"])
        self.assertEqual(len(self.browser.listing.files), 2)
        self.assertIs(self.browser.search(""), self.browser.listing)

    async def test_open_file_hands_url_to_opener(self) -> None:
        file = self.remote.add_file("a.pdf")

        url = await self.browser.open_file(file)

        self.assertEqual(self.opened, [url])
        self.assertTrue(url.startswith("https://drive.example/files/"))

    async def test_open_file_failure_is_notified(self) -> None:
        file = self.remote.add_file("a.pdf")
        self.remote.failures["get_file_access_url"] = NotFoundError("404")

        self.assertIsNone(await self.browser.open_file(file))
        self.assertEqual(self.opened, [])
        self.assertEqual(self.notifier.of("error"), ["Failed to open file"])

    async def test_share_and_permissions_by_file(self) -> None:
        file = self.remote.add_file("a.pdf")

        share = await self.browser.share(file, "  ", "viewer")
        perms = await self.browser.permissions(file)

        self.assertEqual(share.general_url, self.remote.general_url)
        self.assertEqual(perms.status, "shared")

    async def test_logout_clears_session(self) -> None:
        self.browser.logout()
        self.assertFalse(self.browser.session.is_authenticated)


if __name__ == "__main__":
    unittest.main()
