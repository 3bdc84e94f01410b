"""Script to replace the stored feedback templates from a JSON file.

    python -m academy.scripts.load_feedback_templates templates.json

The file holds a list of objects with ``type``, ``average`` (a ``[min, max]``
pair), ``first_part_text`` and ``second_part_text``. The whole file is
rejected when a range is malformed or two ranges of one type overlap.
"""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

from pydantic import TypeAdapter

from academy.database.session import async_session_maker
from academy.exceptions import DomainError
from academy.personalisation.schemas import PersonalisedTextBase
from academy.personalisation.service import check_templates, replace_templates


logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

TEMPLATE_LIST = TypeAdapter(list[PersonalisedTextBase])


def read_templates(path: Path) -> list[PersonalisedTextBase]:
    """Parse and check a template file without touching the database."""
    templates = TEMPLATE_LIST.validate_python(json.loads(path.read_text(encoding="utf-8")))
    check_templates(templates)
    return templates


async def load_feedback_templates(path: Path) -> int:
    """Replace the stored templates with the contents of ``path``."""
    templates = read_templates(path)
    logger.info(f"Read {len(templates)} feedback templates from {path}")

    async with async_session_maker() as session:
        return await replace_templates(session, templates)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("file", type=Path, help="JSON file with the feedback templates")
    args = parser.parse_args(argv)

    try:
        count = asyncio.run(load_feedback_templates(args.file))
    except (OSError, ValueError, DomainError) as e:
        logger.error(f"✗ Feedback templates not loaded: {e}")
        return 1

    logger.info(f"✓ Loaded {count} feedback templates")
    return 0


if __name__ == "__main__":
    sys.exit(main())
