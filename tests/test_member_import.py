"""Roster import from markdown front matter."""

import tempfile
import unittest
from pathlib import Path

from app.services.member_import import load_group, members_from_front_matter, parse_front_matter

VESTRY_MD = """---
title: Vestry
members:
  - name: Jane Warden
    title: Senior Warden
    term: 2024-2027
  - name: Tom Clerk
    title: Clerk
    bio: Keeps the minutes.
  - title: Missing name
---

Body text is ignored.
"""


class TestParseFrontMatter(unittest.TestCase):
    def test_extracts_mapping(self) -> None:
        data = parse_front_matter(VESTRY_MD)
        self.assertEqual(data["title"], "Vestry")
        self.assertEqual(len(data["members"]), 3)

    def test_no_front_matter(self) -> None:
        self.assertEqual(parse_front_matter("# Just markdown"), {})

    def test_unterminated_front_matter(self) -> None:
        self.assertEqual(parse_front_matter("---\ntitle: x\n"), {})

    def test_non_mapping_front_matter(self) -> None:
        self.assertEqual(parse_front_matter("---\n- a\n- b\n---\n"), {})


class TestMembersFromFrontMatter(unittest.TestCase):
    def test_builds_members_and_skips_incomplete(self) -> None:
        members = members_from_front_matter(parse_front_matter(VESTRY_MD), "vestry")
        self.assertEqual([m.name for m in members], ["Jane Warden", "Tom Clerk"])
        self.assertEqual(members[0].term, "2024-2027")
        self.assertIsNone(members[0].bio)
        self.assertEqual(members[1].bio, "Keeps the minutes.")
        self.assertEqual([m.sort_order for m in members], [0, 1])
        self.assertTrue(all(m.group_type == "vestry" for m in members))

    def test_unknown_group_type(self) -> None:
        with self.assertRaises(ValueError):
            members_from_front_matter({"members": []}, "choir")

    def test_members_not_a_list(self) -> None:
        self.assertEqual(members_from_front_matter({"members": "nope"}, "clergy"), [])


class TestLoadGroup(unittest.TestCase):
    def test_reads_group_index(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            (root / "vestry").mkdir()
            (root / "vestry" / "index.md").write_text(VESTRY_MD, encoding="utf-8")
            self.assertEqual(len(load_group(root, "vestry")), 2)
            self.assertEqual(load_group(root, "clergy"), [])
