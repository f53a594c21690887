"""CSV-file-backed implementation of CatalogRepository.

Expected columns per line: ``code,description,cost``, e.g.::

    Ci,Di,CSi
    3,Pencil #HB,1

A missing file or a bad line never stops the server: the file is read
best-effort and every code it could not provide is priced with the
placeholder entry.
"""

from __future__ import annotations

import csv
from pathlib import Path

from billing.domain.model.catalog import Catalog, CatalogEntry
from billing.domain.model.value_objects import FIELD_MAX
from billing.domain.policy import truncate_description
from billing.domain.repository.catalog_repository import CatalogRepository
from billing.infrastructure.logging import get_logger

log = get_logger(__name__)

_HEADER_PREFIXES = ("ci", "code")


class CsvCatalogRepository(CatalogRepository):

    def __init__(self, file_path: Path, encoding: str = "utf-8") -> None:
        self._file_path = Path(file_path)
        self._encoding = encoding

    # --- CatalogRepository interface ------------------------------------------

    def load(self) -> Catalog:
        try:
            with self._file_path.open(newline="", encoding=self._encoding) as fh:
                rows = list(csv.reader(fh))
        except (OSError, UnicodeDecodeError, csv.Error) as exc:
            log.warning(
                "could not load catalog {}: {}; every code will be priced as not available",
                self._file_path,
                exc,
            )
            return Catalog()

        entries: dict[int, CatalogEntry] = {}
        for line_number, row in enumerate(rows, start=1):
            parsed = self._parse_row(line_number, row)
            if parsed is not None:
                code, entry = parsed
                entries[code] = entry

        log.info("loaded {} catalog entries from {}", len(entries), self._file_path)
        return Catalog(entries)

    # --- Parsing --------------------------------------------------------------

    def _parse_row(
        self, line_number: int, row: list[str]
    ) -> tuple[int, CatalogEntry] | None:
        fields = [f.strip() for f in row]
        if not any(fields):
            return None

        fields[0] = fields[0].replace("\ufeff", "")
        if fields[0].lower().startswith(_HEADER_PREFIXES):
            return None

        if len(fields) < 3:
            log.warning("skipping malformed catalog line {}: {}", line_number, row)
            return None

        # Unquoted commas inside a description split it into extra fields.
        code_str, cost_str = fields[0], fields[-1]
        description = ",".join(row[1:-1]).strip()
        # A space before the opening quote defeats csv quoting.
        if len(description) >= 2 and description[0] == description[-1] == '"':
            description = description[1:-1]
        try:
            code = int(code_str)
            cost = int(cost_str.replace("$", "").strip())
        except ValueError:
            log.warning("skipping malformed catalog line {}: {}", line_number, row)
            return None

        if code < 0 or code > FIELD_MAX:
            log.warning("skipping catalog line {}: code {} out of range", line_number, code)
            return None
        if cost < 0 or cost > FIELD_MAX:
            log.warning(
                "catalog line {}: cost {} out of range, using 0", line_number, cost
            )
            cost = 0

        return code, CatalogEntry(
            description=truncate_description(description.encode(self._encoding)),
            unit_cost=cost,
        )
