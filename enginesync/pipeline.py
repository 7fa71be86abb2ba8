# enginesync/pipeline.py
"""
End-to-end synchronization of a CSV log and an XML log.

Stages run one after the other on the calling thread:
parse -> unit normalization -> resample -> offset -> merge -> serialize.
The first error aborts the run; there is no partial result.
"""
from __future__ import annotations

import logging
from concurrent.futures import Executor, Future
from dataclasses import dataclass
from pathlib import Path
from typing import Callable

from enginesync.config import FIRST_PREFIX, SECOND_PREFIX, SyncConfig
from enginesync.core import (
    InsufficientDataError,
    MergedTable,
    RawSeries,
    UniformSeries,
    find_offset,
    merge,
    resample,
)
from enginesync.io.load import load_log
from enginesync.io.writer import to_csv_text
from enginesync.units import normalize_speed

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[str], None]


@dataclass(frozen=True, slots=True)
class SyncResult:
    resampled_csv: UniformSeries
    resampled_xml: UniformSeries
    time_offset: float
    offset_source: str          # "manual" or "estimated"
    table: MergedTable
    csv_text: str


def _reporter(progress: ProgressCallback | None) -> ProgressCallback:
    def report(message: str) -> None:
        logger.info(message)
        if progress is not None:
            progress(message)

    return report


def align_series(
    first: RawSeries,
    second: RawSeries,
    config: SyncConfig | None = None,
    progress: ProgressCallback | None = None,
) -> SyncResult:
    """
    Resample both series, find (or take) the offset, and merge them.

    `first` provides the output grid; `second` is shifted onto it.
    """
    config = config or SyncConfig()
    report = _reporter(progress)

    first = normalize_speed(first, config.csv_speed_unit)
    second = normalize_speed(second, config.xml_speed_unit)

    report("Resampling data...")
    uniform_first = resample(first, config.resample_interval)
    uniform_second = resample(second, config.resample_interval)

    if uniform_first.n < config.min_samples or uniform_second.n < config.min_samples:
        logger.debug(
            "Resampled lengths %d / %d below floor %d",
            uniform_first.n,
            uniform_second.n,
            config.min_samples,
        )
        raise InsufficientDataError(
            "Not enough data points after resampling for a reliable analysis."
        )

    if config.manual_offset is not None:
        time_offset = config.manual_offset
        offset_source = "manual"
    else:
        report("Calculating optimal time offset...")
        time_offset = find_offset(uniform_first, uniform_second)
        offset_source = "estimated"
    logger.info("Using %s time offset %.3f s", offset_source, time_offset)

    report("Merging data...")
    table = merge(
        uniform_first,
        uniform_second,
        time_offset,
        first_prefix=FIRST_PREFIX,
        second_prefix=SECOND_PREFIX,
    )

    return SyncResult(
        resampled_csv=uniform_first,
        resampled_xml=uniform_second,
        time_offset=time_offset,
        offset_source=offset_source,
        table=table,
        csv_text=to_csv_text(table),
    )


def run_pipeline(
    csv_path: str | Path,
    xml_path: str | Path,
    config: SyncConfig | None = None,
    progress: ProgressCallback | None = None,
) -> SyncResult:
    """Parse both logs from disk and synchronize them."""
    report = _reporter(progress)

    report("Received data. Processing...")
    csv_series = load_log(csv_path, "csv")
    report("CSV parsed.")

    xml_series = load_log(xml_path, "xml")
    report("XML parsed.")

    return align_series(csv_series, xml_series, config, progress)


def submit_pipeline(
    executor: Executor,
    csv_path: str | Path,
    xml_path: str | Path,
    config: SyncConfig | None = None,
    progress: ProgressCallback | None = None,
) -> Future[SyncResult]:
    """
    Run the pipeline on `executor`, keeping the caller's thread free.

    `progress` is called from the worker. A failure is re-raised by
    ``Future.result()``.
    """
    return executor.submit(run_pipeline, csv_path, xml_path, config, progress)
