"""CSV contract between the server and the engine process: one header line, one row per year."""

import logging
import math
from typing import Iterable, List

from oil_model_server.application.exceptions import ParseFailedError
from oil_model_server.domain.models.simulation import SimulationResult

logger = logging.getLogger(__name__)

CSV_HEADER = "Year,Scenario,Revenue,ProductionVolume,NewWellsFund,OldWellsFund"
CSV_FIELD_COUNT = 6
ROW_FORMAT = "%.2f,%d,%.2f,%.2f,%.2f,%.2f"


def format_row(result: SimulationResult) -> str:
    return ROW_FORMAT % (
        float(result.year),
        result.scenario,
        result.revenue,
        result.production_volume,
        result.new_wells_fund,
        result.old_wells_fund,
    )


def format_output(results: Iterable[SimulationResult]) -> str:
    """Render results exactly as the engine writes them to stdout."""
    lines = [CSV_HEADER]
    lines.extend(format_row(r) for r in results)
    return "\n".join(lines) + "\n"


def _number(field: str) -> float:
    """Finite float value of field; unparseable, infinite or NaN fields read as 0."""
    try:
        value = float(field)
    except ValueError:
        return 0.0
    return value if math.isfinite(value) else 0.0


def _integer(field: str) -> int:
    try:
        return int(field)
    except ValueError:
        return 0


def _parse_row(fields: List[str]) -> SimulationResult:
    return SimulationResult(
        year=int(round(_number(fields[0]))),
        scenario=_integer(fields[1]),
        revenue=_number(fields[2]),
        production_volume=_number(fields[3]),
        new_wells_fund=_number(fields[4]),
        old_wells_fund=_number(fields[5]),
    )


def parse_output(output: bytes) -> List[SimulationResult]:
    """
    Parse engine stdout. The first line is the header and always skipped; blank lines and
    rows with fewer than six fields are skipped. Fields that are not finite numbers read as 0.
    Raises ParseFailedError only when the stream cannot be decoded at all.
    """
    try:
        text = output.decode("utf-8")
    except UnicodeDecodeError as e:
        raise ParseFailedError(f"engine output is not valid UTF-8: {e}") from e

    results: List[SimulationResult] = []
    for line_number, raw in enumerate(text.splitlines(), start=1):
        line = raw.strip()
        if line_number == 1 or not line:
            continue
        fields = [f.strip() for f in line.split(",")]
        if len(fields) < CSV_FIELD_COUNT:
            logger.debug("engine_row_skipped", extra={"line": line_number, "reason": "too few fields"})
            continue
        results.append(_parse_row(fields))
    return results
