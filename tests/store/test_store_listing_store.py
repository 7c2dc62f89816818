import asyncio
import unittest

from fakes import FakeRemote, RecordingNotifier

from gdrivebrowser.errors import ApiError, NetworkError
from gdrivebrowser.models import ListingSnapshot, TrashSnapshot
from gdrivebrowser.navigation import ROOT, Location
from gdrivebrowser.store import ListingState, ListingStore


class TestListingStore(unittest.IsolatedAsyncioTestCase):
    def setUp(self) -> None:
        self.remote = FakeRemote()
        self.notifier = RecordingNotifier()
        self.store = ListingStore(self.remote, self.notifier, page_size=100)

    async def test_refresh_populates_both_collections(self) -> None:
        docs = self.remote.add_folder("Docs")
        self.remote.add_file("a.txt")
        self.remote.add_file("inside.txt", docs.id)

        listing = await self.store.refresh(ROOT)

        self.assertEqual([f.name for f in listing.folders], ["Docs"])
        self.assertEqual([f.name for f in listing.files], ["a.txt"])
        self.assertEqual(self.store.state, ListingState.POPULATED)
        self.assertIn(("list_files", None, 100, 0), self.remote.calls)

    async def test_refresh_scopes_to_location(self) -> None:
        docs = self.remote.add_folder("Docs")
        self.remote.add_file("inside.txt", docs.id)

        listing = await self.store.refresh(Location(docs.id))

        self.assertEqual(listing.folders, ())
        self.assertEqual([f.name for f in listing.files], ["inside.txt"])

    async def test_one_failed_leg_empties_both(self) -> None:
        self.remote.add_folder("Docs")
        self.remote.add_file("a.txt")
        await self.store.refresh(ROOT)

        self.remote.failures["list_files"] = NetworkError("boom")
        listing = await self.store.refresh(ROOT)

        self.assertEqual(listing, ListingSnapshot())
        self.assertEqual(self.store.folders, ())
        self.assertEqual(self.store.files, ())
        self.assertEqual(self.store.state, ListingState.EMPTY_ON_ERROR)
        self.assertEqual(self.notifier.of("error"), ["Failed to load folder contents"])

    async def test_backend_message_is_surfaced(self) -> None:
        self.remote.failures["list_folders"] = ApiError("x", backend_message="Drive is down")

        await self.store.refresh(ROOT)

        self.assertEqual(self.store.last_error, "Drive is down")
        self.assertEqual(self.notifier.of("error"), ["Drive is down"])

    async def test_refresh_does_not_raise_on_unexpected_error(self) -> None:
        self.remote.failures["list_folders"] = RuntimeError("bug")

        with self.assertLogs("gdrivebrowser.store.listing_store", level="ERROR"):
            listing = await self.store.refresh(ROOT)

        self.assertTrue(listing.is_empty)
        self.assertEqual(self.store.state, ListingState.EMPTY_ON_ERROR)

    async def test_stale_refresh_is_discarded(self) -> None:
        old = self.remote.add_folder("Old")
        new = self.remote.add_folder("New")
        self.remote.add_file("old.txt", old.id)
        self.remote.add_file("new.txt", new.id)

        gate = asyncio.Event()
        self.remote.gates[f"list_folders:{old.id}"] = gate

        slow = asyncio.create_task(self.store.refresh(Location(old.id)))
        await asyncio.sleep(0)
        await self.store.refresh(Location(new.id))
        gate.set()
        await slow

        self.assertEqual([f.name for f in self.store.files], ["new.txt"])
        self.assertEqual(self.store.location, Location(new.id))
        self.assertEqual(self.store.state, ListingState.POPULATED)

    async def test_loading_state_while_pending(self) -> None:
        gate = asyncio.Event()
        self.remote.gates["list_files"] = gate

        task = asyncio.create_task(self.store.refresh(ROOT))
        await asyncio.sleep(0)
        self.assertEqual(self.store.state, ListingState.LOADING)

        gate.set()
        await task
        self.assertEqual(self.store.state, ListingState.POPULATED)

    async def test_trash_is_independent(self) -> None:
        self.remote.add_folder("Gone", trashed=True)
        self.remote.add_file("gone.txt", trashed=True)
        self.remote.add_file("kept.txt")

        await self.store.refresh(ROOT)
        self.assertEqual(self.store.trash, TrashSnapshot())
        self.assertNotIn("list_trash_folders", self.remote.call_names())

        trash = await self.store.refresh_trash()
        self.assertEqual([f.name for f in trash.folders], ["Gone"])
        self.assertEqual([f.name for f in trash.files], ["gone.txt"])
        self.assertTrue(self.store.in_trash(trash.files[0].id))

    async def test_trash_failure_empties_trash_only(self) -> None:
        self.remote.add_file("kept.txt")
        self.remote.add_file("gone.txt", trashed=True)
        await self.store.refresh(ROOT)
        await self.store.refresh_trash()

        self.remote.failures["list_trash_folders"] = NetworkError("down")
        trash = await self.store.refresh_trash()

        self.assertTrue(trash.is_empty)
        self.assertEqual(self.store.trash_state, ListingState.EMPTY_ON_ERROR)
        self.assertEqual([f.name for f in self.store.files], ["kept.txt"])
        self.assertEqual(self.notifier.of("error"), ["Failed to load trash"])

    async def test_unexpected_trash_failure_is_logged_as_trash_refresh(self) -> None:
        self.remote.failures["list_trash_files"] = RuntimeError("bug")

        with self.assertLogs("gdrivebrowser.store.listing_store", level="ERROR") as logs:
            trash = await self.store.refresh_trash()

        self.assertTrue(trash.is_empty)
        self.assertTrue(any("[refresh_trash] unexpected listing failure" in line for line in logs.output))

    def test_page_size_must_be_positive(self) -> None:
        with self.assertRaises(ValueError):
            ListingStore(self.remote, self.notifier, page_size=0)


if __name__ == "__main__":
    unittest.main()
