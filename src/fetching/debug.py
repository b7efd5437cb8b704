"""Optional on-disk snapshots of API responses for troubleshooting runs."""

from __future__ import annotations

import datetime as dt
import os
import re
from typing import Any, Mapping, Optional

from .config import BODY_PREVIEW_CHARS

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]")


def sanitize_name(label: str) -> str:
    """Replace characters that are not safe in file names with underscores."""
    cleaned = _UNSAFE_CHARS.sub("_", label or "")
    return cleaned or "response"


def body_preview(text: Optional[str], limit: int = BODY_PREVIEW_CHARS) -> str:
    """Return the first `limit` characters of a response body."""
    return (text or "")[:limit]


class DebugSink:
    """Write header and body snapshots for each recorded response.

    Files are write-only side artifacts: nothing in the run reads them back, and
    a failure to write one is reported but never propagated.
    """

    def __init__(self, directory: str) -> None:
        self.directory = directory
        self.written = 0

    def _stamp(self) -> str:
        return dt.datetime.now(dt.timezone.utc).strftime("%Y%m%dT%H%M%S.%fZ")

    def record(self,
               label: str,
               status: Optional[int],
               headers: Optional[Mapping[str, Any]],
               body: Optional[str]) -> None:
        """Persist one response; OSErrors are reported as warnings."""
        self.written += 1
        prefix = f"{sanitize_name(label)}_{self._stamp()}_{self.written}"
        header_lines = [f"status: {status if status is not None else 'no response'}", ""]
        header_lines.extend(f"{key}: {value}" for key, value in (headers or {}).items())
        preview_lines = body_preview(body).splitlines()
        try:
            os.makedirs(self.directory, exist_ok=True)
            with open(os.path.join(self.directory, f"{prefix}_headers.txt"), "w", encoding="utf-8") as f:
                f.write("\n".join(header_lines) + "\n")
            with open(os.path.join(self.directory, f"{prefix}_body.txt"), "w", encoding="utf-8") as f:
                f.write("\n".join(preview_lines) + "\n")
        except OSError as exc:
            print(f"[warn] could not write debug snapshot {prefix}: {exc}")


__all__ = ["DebugSink", "sanitize_name", "body_preview"]
