"""Plain-text renderings of a projection for download."""

from __future__ import annotations

import csv
import io

from sipcalc.schemas.projection import ProjectionResult

TIMELINE_COLUMNS = (
    "year",
    "periods_elapsed",
    "contributed",
    "value",
    "growth",
    "period_contribution",
)


def timeline_to_csv(result: ProjectionResult) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(TIMELINE_COLUMNS)
    for row in result.timeline:
        writer.writerow(
            [
                row.year,
                row.periodsElapsed,
                f"{row.contributed:.2f}",
                f"{row.value:.2f}",
                f"{row.growth:.2f}",
                f"{row.periodContribution:.2f}",
            ]
        )
    return buffer.getvalue()
