from __future__ import annotations

import contextlib
import logging
from pathlib import Path

from ..exceptions import WriteError

logger = logging.getLogger(__name__)


def write_feed(xml: str, path: Path | str) -> Path:
    """Create the parent directory if needed and replace ``path`` with ``xml``.

    The document goes to a sibling temporary file first and is moved into
    place only once it is complete, so a failed write leaves the previous
    feed untouched.
    """
    target = Path(path)
    tmp = target.with_name(f"{target.name}.tmp")
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        tmp.write_text(xml, encoding="utf-8")
        tmp.replace(target)
    except OSError as exc:
        with contextlib.suppress(OSError):
            tmp.unlink(missing_ok=True)
        raise WriteError(f"Could not write feed to {target}: {exc}") from exc
    logger.debug("Wrote %d characters to %s", len(xml), target)
    return target
