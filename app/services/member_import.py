"""Import roster members from markdown files with YAML front matter."""

import logging
from pathlib import Path
from typing import Any

import yaml

from app.models import Member
from app.schemas.members import GROUP_TYPES

logger = logging.getLogger(__name__)

FRONT_MATTER_DELIMITER = "---"


def parse_front_matter(text: str) -> dict[str, Any]:
    """Return the YAML mapping between leading '---' lines, or {} when there is none."""
    lines = text.splitlines()
    if not lines or lines[0].strip() != FRONT_MATTER_DELIMITER:
        return {}
    for end, line in enumerate(lines[1:], start=1):
        if line.strip() == FRONT_MATTER_DELIMITER:
            data = yaml.safe_load("\n".join(lines[1:end]))
            return data if isinstance(data, dict) else {}
    return {}


def members_from_front_matter(data: dict[str, Any], group_type: str) -> list[Member]:
    """Build Member rows from a 'members' list; sort_order is the list position."""
    if group_type not in GROUP_TYPES:
        raise ValueError(f"group_type must be one of {list(GROUP_TYPES)}, got {group_type!r}")
    entries = data.get("members")
    if not isinstance(entries, list):
        return []
    members: list[Member] = []
    for position, entry in enumerate(entries):
        if not isinstance(entry, dict) or not entry.get("name") or not entry.get("title"):
            logger.warning(
                "Skipping roster entry without name/title",
                extra={"group_type": group_type, "position": position},
            )
            continue
        members.append(
            Member(
                group_type=group_type,
                name=str(entry["name"]),
                title=str(entry["title"]),
                term=str(entry["term"]) if entry.get("term") else None,
                image=str(entry["image"]) if entry.get("image") else None,
                bio=str(entry["bio"]) if entry.get("bio") else None,
                sort_order=position,
            )
        )
    return members


def load_group(content_dir: Path, group_type: str) -> list[Member]:
    """Read <content_dir>/<group_type>/index.md; a missing file yields no members."""
    path = content_dir / group_type / "index.md"
    if not path.is_file():
        logger.info("No roster file for group", extra={"group_type": group_type, "path": str(path)})
        return []
    return members_from_front_matter(parse_front_matter(path.read_text(encoding="utf-8")), group_type)
