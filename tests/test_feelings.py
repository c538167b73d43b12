import asyncio
import unittest
from types import SimpleNamespace
from unittest.mock import patch

from fake_dynamo import FakeTable
from socialshop.core.cursor import encode_cursor
from socialshop.core.errors import ValidationError
from socialshop.models import FeelingIn
from socialshop.routers import feelings as feelings_router
from socialshop.services import feelings
from socialshop.services.feeling_catalog import (
    FALLBACK_FEELING,
    FEELINGS,
    FeelingType,
    catalog_entries,
    lookup_feeling,
)


def run_async(coro):
    return asyncio.run(coro)


class TestFeelingCatalog(unittest.TestCase):
    def test_lookup_known_type(self):
        meta = lookup_feeling("happy")
        self.assertEqual(meta.emoji, "😊")
        self.assertEqual(meta.description, "Feeling happy and content")

    def test_lookup_unknown_type_falls_back(self):
        self.assertEqual(lookup_feeling("ecstatic"), FALLBACK_FEELING)
        self.assertEqual(lookup_feeling("ecstatic").description, "Feeling something")
        self.assertEqual(lookup_feeling(None), FALLBACK_FEELING)

    def test_every_type_has_an_entry(self):
        self.assertEqual(set(FEELINGS), set(FeelingType))
        self.assertEqual(len(catalog_entries()), len(FeelingType))

    def test_catalog_is_read_only(self):
        with self.assertRaises(TypeError):
            FEELINGS[FeelingType.HAPPY] = FALLBACK_FEELING


class FeelingServiceTestCase(unittest.TestCase):
    def setUp(self):
        self.table = FakeTable("feelings", ("post_id", "feeling_id"))
        patcher = patch.object(feelings, "T", SimpleNamespace(feelings=self.table))
        patcher.start()
        self.addCleanup(patcher.stop)


class TestAttachFeeling(FeelingServiceTestCase):
    def test_attach_fills_emoji_and_description_from_catalog(self):
        feeling = feelings.attach_feeling("user", "p1", {"type": "grateful"})
        self.assertEqual(feeling["type"], "grateful")
        self.assertEqual(feeling["intensity"], 5)
        self.assertEqual(feeling["emoji"], "🙏")
        self.assertEqual(feeling["description"], "Feeling grateful and thankful")
        self.assertEqual(feeling["post_id"], "p1")
        self.assertEqual(feeling["user_id"], "user")
        self.assertEqual(len(self.table.items), 1)

    def test_attach_keeps_caller_values(self):
        feeling = feelings.attach_feeling(
            "user", "p1", {"type": "tired", "intensity": 9, "emoji": "🥱", "description": "Long day"}
        )
        self.assertEqual(feeling["intensity"], 9)
        self.assertEqual(feeling["emoji"], "🥱")
        self.assertEqual(feeling["description"], "Long day")

    def test_attach_rejects_invalid_input_without_writing(self):
        bad_bodies = (
            {"type": "ecstatic"},
            {},
            {"type": "happy", "intensity": 0},
            {"type": "happy", "intensity": 11},
            {"type": "happy", "description": "x" * 201},
        )
        for body in bad_bodies:
            with self.subTest(body=body):
                with self.assertRaises(ValidationError):
                    feelings.attach_feeling("user", "p1", body)
        self.assertEqual(self.table.writes, [])

    def test_description_at_limit_is_accepted(self):
        feeling = feelings.attach_feeling("user", "p1", {"type": "calm", "description": "x" * 200})
        self.assertEqual(len(feeling["description"]), 200)


class TestListFeelings(FeelingServiceTestCase):
    def seed(self, feeling_id, post_id, feeling_type, created_at):
        self.table.seed(
            {
                "post_id": post_id,
                "feeling_id": feeling_id,
                "user_id": "user",
                "feeling_type": feeling_type,
                "intensity": 5,
                "emoji": "😊",
                "description": "",
                "created_at": created_at,
                "updated_at": created_at,
            }
        )

    def test_list_post_feelings_newest_first(self):
        self.seed("f1", "p1", "happy", 10)
        self.seed("f2", "p1", "sad", 30)
        self.seed("f3", "p2", "happy", 20)
        resp = feelings.list_post_feelings("p1")
        self.assertEqual([f["feeling_id"] for f in resp], ["f2", "f1"])

    def test_list_by_type_pages_with_cursor(self):
        self.seed("f1", "p1", "happy", 10)
        self.seed("f2", "p2", "happy", 20)
        self.seed("f3", "p3", "happy", 30)
        self.seed("f4", "p3", "sad", 40)
        first = feelings.list_feelings_by_type("happy", 2)
        self.assertEqual([f["feeling_id"] for f in first["items"]], ["f3", "f2"])
        self.assertTrue(first["next_cursor"])
        second = feelings.list_feelings_by_type("happy", 2, first["next_cursor"])
        self.assertEqual([f["feeling_id"] for f in second["items"]], ["f1"])
        self.assertIsNone(second["next_cursor"])

    def test_list_by_type_rejects_unknown_type_and_bad_cursor(self):
        with self.assertRaises(ValidationError):
            feelings.list_feelings_by_type("ecstatic", 10)
        with self.assertRaises(ValidationError):
            feelings.list_feelings_by_type("happy", 10, "%%%not-a-cursor")

    def test_list_by_type_rejects_cursor_that_is_not_an_index_key(self):
        self.seed("f1", "p1", "happy", 10)
        good = {"post_id": "p1", "feeling_id": "f1", "feeling_type": "happy", "created_at": 10}
        bad_keys = (
            {"post_id": "p", "created_at": 1.5},
            {**good, "created_at": 1.5},
            {**good, "created_at": True},
            {**good, "post_id": 3},
            {**good, "feeling_type": "sad"},
            {**good, "extra": "x"},
        )
        for key in bad_keys:
            with self.subTest(key=key):
                with self.assertRaises(ValidationError) as ctx:
                    feelings.list_feelings_by_type("happy", 10, encode_cursor(key))
                self.assertEqual(ctx.exception.message, "Invalid cursor")
        resp = feelings.list_feelings_by_type("happy", 10, encode_cursor(good))
        self.assertEqual(resp["items"], [])


class TestFeelingRoutes(unittest.TestCase):
    def test_catalog_lookup_route_uses_fallback(self):
        resp = run_async(feelings_router.get_feeling_meta("ecstatic"))
        self.assertEqual(resp, {"type": "ecstatic", "emoji": "😊", "description": "Feeling something"})

    def test_catalog_route_lists_all_types(self):
        resp = run_async(feelings_router.get_feeling_catalog())
        self.assertIn({"type": "happy", "emoji": "😊", "description": "Feeling happy and content"}, resp)

    def test_add_post_feeling(self):
        req = SimpleNamespace(headers={"user-agent": "agent"}, client=None, state=SimpleNamespace())
        created = {"feeling_id": "f1", "type": "happy"}
        with patch.object(feelings_router, "attach_feeling", return_value=created) as attach_mock:
            with patch.object(feelings_router, "audit_event") as audit_mock:
                resp = run_async(
                    feelings_router.add_post_feeling(req, "p1", FeelingIn(type="happy", intensity=7), ctx={"user_id": "user"})
                )
        attach_mock.assert_called_once_with(
            "user", "p1", {"type": "happy", "intensity": 7, "emoji": None, "description": None}
        )
        audit_mock.assert_called_once()
        self.assertEqual(resp["feeling_id"], "f1")


if __name__ == "__main__":
    unittest.main()
