"""Column options file loader.

Reads the per-column declarative options from a JSON object stored in
``base_dir``. A missing file yields an empty map. Comparators cannot be
expressed in JSON; hosts attach them programmatically.
"""

from __future__ import annotations

import json
import logging
import os

from ..config import settings
from .options import ColumnOptionsMap, column_options_from_dict

__all__ = ["ColumnOptionsFileLoader"]

_logger = logging.getLogger(__name__)


class ColumnOptionsFileLoader:
    FILENAME = settings.COLUMN_OPTIONS_FILENAME

    def __init__(self, base_dir: str):
        self.base_dir = base_dir
        self.path = os.path.join(base_dir, self.FILENAME)

    def load(self) -> ColumnOptionsMap:
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                raw = json.load(f)
        except (OSError, ValueError) as exc:
            _logger.warning("column options unreadable: path=%s error=%s", self.path, exc)
            return {}
        if not isinstance(raw, dict):
            _logger.warning("column options ignored: path=%s is not a JSON object", self.path)
            return {}
        return column_options_from_dict(raw)
