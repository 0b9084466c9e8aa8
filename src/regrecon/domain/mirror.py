"""Loading authoritative registry dumps into the local mirror."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from datetime import UTC, date, datetime
from logging import getLogger
from typing import TYPE_CHECKING

from regrecon.domain.model import MirrorSync

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Mapping

    from regrecon.domain.model import CompanyRecord
    from regrecon.domain.ports import RegistryMirror

    type RowParser = Callable[[Mapping[str, object]], CompanyRecord]

log = getLogger(__name__)

DEFAULT_IMPORT_BATCH_SIZE = 500


@dataclass(slots=True)
class ImportSummary:
    imported: int = 0
    skipped: int = 0
    anomalies: int = 0
    by_region: dict[str, int] = field(default_factory=dict[str, int])


def load_mirror(
    rows: Iterable[Mapping[str, object]],
    *,
    parse: RowParser,
    mirror: RegistryMirror,
    dataset_version: str,
    today: date | None = None,
    batch_size: int = DEFAULT_IMPORT_BATCH_SIZE,
) -> ImportSummary:
    """Parse ``rows`` and upsert them into ``mirror``.

    Rows that cannot be parsed are skipped. A registration date after ``today`` is
    a temporal anomaly: the row is kept but counted and logged, since official
    dumps occasionally carry typos in opening dates.
    """

    reference_day = today or datetime.now(tz=UTC).date()
    summary = ImportSummary()
    regions: Counter[str] = Counter()
    batch: list[CompanyRecord] = []

    for line_number, row in enumerate(rows, start=1):
        try:
            record = parse(row)
        except ValueError as exc:
            summary.skipped += 1
            log.warning("Skipping mirror row %s: %s", line_number, exc)
            continue
        if record.registration_date > reference_day:
            summary.anomalies += 1
            log.warning(
                "Temporal anomaly for %s (%s): registration date %s is in the future",
                record.tax_id,
                record.legal_name,
                record.registration_date.isoformat(),
            )
        batch.append(record)
        regions[record.region] += 1
        if len(batch) >= batch_size:
            summary.imported += mirror.upsert_companies(batch)
            batch = []

    if batch:
        summary.imported += mirror.upsert_companies(batch)

    summary.by_region = dict(regions)
    mirror.mark_synced(
        MirrorSync(
            dataset_version=dataset_version,
            synced_at=datetime.now(tz=UTC),
            record_count=summary.imported,
        )
    )
    log.info(
        "Mirror import %s finished: imported=%s, skipped=%s, anomalies=%s",
        dataset_version,
        summary.imported,
        summary.skipped,
        summary.anomalies,
    )
    return summary
