import sys
import unittest
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from models import MASKED_WEBHOOK_PART, ManifestEntry, RepositoryRef, Webhook, WebhookSpec


class TestManifestEntry(unittest.TestCase):
    def test_parse_direct_entry(self):
        entry = ManifestEntry.parse("group/sub/repo")
        self.assertEqual(entry.group_path, "group/sub")
        self.assertEqual(entry.last_segment, "repo")
        self.assertFalse(entry.is_wildcard)

    def test_parse_wildcard_entry(self):
        entry = ManifestEntry.parse("group/sub/*")
        self.assertEqual(entry.group_path, "group/sub")
        self.assertTrue(entry.is_wildcard)

    def test_parse_line_without_slash(self):
        entry = ManifestEntry.parse("onlyname")
        self.assertEqual(entry.group_path, "")
        self.assertEqual(entry.last_segment, "onlyname")


class TestRepositoryRef(unittest.TestCase):
    def test_from_full_path(self):
        ref = RepositoryRef.from_full_path("teamB/sub/x")
        self.assertEqual(ref, RepositoryRef(group_path="teamB/sub", repo_name="x"))
        self.assertEqual(ref.full_path, "teamB/sub/x")

    def test_full_path_with_empty_group(self):
        self.assertEqual(RepositoryRef("", "onlyname").full_path, "/onlyname")


class TestWebhook(unittest.TestCase):
    def test_from_api_keeps_unknown_fields(self):
        hook = Webhook.from_api(
            {
                "id": 7,
                "url": "https://hooks.example.com/in",
                "push_events": True,
                "tag_push_events": False,
                "project_id": 3,
            }
        )
        self.assertEqual(hook.id, 7)
        self.assertTrue(hook.push_events)
        self.assertFalse(hook.issues_events)
        self.assertEqual(hook.extra, {"tag_push_events": False, "project_id": 3})

    def test_targets_is_exact(self):
        hook = Webhook(id=1, url="https://hooks.example.com/in")
        self.assertTrue(hook.targets("https://hooks.example.com/in"))
        self.assertFalse(hook.targets("https://hooks.example.com/in/"))
        self.assertFalse(hook.targets("https://HOOKS.example.com/in"))


class TestWebhookSpec(unittest.TestCase):
    def test_payload_has_fixed_event_set(self):
        payload = WebhookSpec(url="https://hooks.example.com/in").to_payload()
        self.assertEqual(
            payload,
            {
                "url": "https://hooks.example.com/in",
                "token": MASKED_WEBHOOK_PART,
                "push_events": True,
                "merge_requests_events": True,
                "issues_events": True,
                "enable_ssl_verification": True,
            },
        )


if __name__ == "__main__":
    unittest.main()
