"""
Seed roster members from a content directory of <group>/index.md files with YAML front matter.
Run from project root:
  python -m app.scripts.import_members CONTENT_DIR [--replace]
Each group file lists entries under a 'members' key (name, title, term, image, bio).
"""
import argparse
import logging
import sys
from pathlib import Path

from app.core.config import settings
from app.core.database import SessionLocal
from app.core.logging import configure_logging
from app.models import Member
from app.schemas.members import GROUP_TYPES
from app.services.member_import import load_group

logger = logging.getLogger("app.scripts.import_members")


def main() -> int:
    parser = argparse.ArgumentParser(description="Import roster members from markdown front matter.")
    parser.add_argument("content_dir", type=Path, help="Directory containing one folder per group")
    parser.add_argument(
        "--replace",
        action="store_true",
        help="Delete existing members of each imported group first",
    )
    args = parser.parse_args()
    configure_logging(settings.LOG_LEVEL)

    if not args.content_dir.is_dir():
        print(f"Not a directory: {args.content_dir}", file=sys.stderr)
        return 1

    db = SessionLocal()
    try:
        total = 0
        for group_type in GROUP_TYPES:
            members = load_group(args.content_dir, group_type)
            if not members:
                continue
            if args.replace:
                db.query(Member).filter(Member.group_type == group_type).delete()
            db.add_all(members)
            total += len(members)
            logger.info("Imported group", extra={"group_type": group_type, "count": len(members)})
        db.commit()
        print(f"Imported {total} members.")
        return 0
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
