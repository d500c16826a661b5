from __future__ import annotations

import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Iterable, Mapping, Optional, Sequence

from ..common.datetime_utils import now_utc
from ..core import constants as c
from ..core.exceptions import DegenerateBaselineError, DetectorAbstained
from .aggregator import RiskAggregator
from .config import AnalyzerConfig
from .detectors.base import PatternDetector
from .detectors.factory import DetectorFactory
from .model import AnalysisResult, AnalysisWindow, LeaveEvent, PatternFlag
from .normalizer import LeaveNormalizer
from .report import ReportBuilder

logger = logging.getLogger(__name__)


@dataclass
class DetectionRun:
    """Collected detector output for one employee."""

    flags: list[PatternFlag] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    notes: list[str] = field(default_factory=list)


def run_detectors(
    detectors: Sequence[PatternDetector],
    timeline: Sequence[LeaveEvent],
    window: AnalysisWindow,
    config: AnalyzerConfig,
) -> DetectionRun:
    """Invoke each detector in isolation; one failing detector never stops the rest."""
    run = DetectionRun()
    for detector in detectors:
        try:
            flag = detector.detect(timeline, window, config)
        except DegenerateBaselineError as exc:
            run.warnings.append(f"{detector.name} skipped: {exc}")
            continue
        except DetectorAbstained as exc:
            run.notes.append(f"{detector.name} abstained: {exc}")
            continue
        except Exception as exc:
            logger.exception("Detector %s failed", detector.name)
            run.warnings.append(f"{detector.name} failed: {type(exc).__name__}: {exc}")
            continue
        if flag is not None:
            run.flags.append(flag)
    return run


class LeavePatternService:
    """Runs the pipeline: normalize -> detect (fan-out) -> aggregate (fan-in) -> report."""

    def __init__(
        self,
        config: Optional[AnalyzerConfig] = None,
        *,
        detectors: Optional[Sequence[PatternDetector]] = None,
        normalizer: Optional[LeaveNormalizer] = None,
        report_builder: Optional[ReportBuilder] = None,
        clock: Callable[[], datetime] = now_utc,
        max_workers: int = c.DEFAULT_MAX_WORKERS,
    ):
        self._config = config or AnalyzerConfig()
        self._detectors = tuple(detectors) if detectors is not None else DetectorFactory().build()
        self._normalizer = normalizer or LeaveNormalizer()
        self._report_builder = report_builder or ReportBuilder()
        self._clock = clock
        self._max_workers = max(1, int(max_workers))

    @property
    def config(self) -> AnalyzerConfig:
        return self._config

    def resolve_config(self, overrides: Optional[Mapping[str, Any]] = None) -> AnalyzerConfig:
        return AnalyzerConfig.from_mapping(overrides, base=self._config)

    def analyze(
        self,
        employee_id: str,
        records: Optional[Iterable[Any]],
        window: AnalysisWindow,
        *,
        config: Optional[AnalyzerConfig] = None,
        now: Optional[datetime] = None,
    ) -> AnalysisResult:
        config = config or self._config
        employee_id = str(employee_id)

        timeline = self._normalizer.normalize(records, window, employee_id=employee_id)
        run = run_detectors(self._detectors, timeline.events, window, config)
        assessment = RiskAggregator(config).aggregate(run.flags)

        result = self._report_builder.build(
            employee_id=employee_id,
            window=window,
            generated_at=now or self._clock(),
            assessment=assessment,
            warnings=[*timeline.warnings, *run.warnings],
            notes=run.notes,
        )
        logger.info(
            "Leave pattern analysis employee=%s events=%s flags=%s score=%.2f",
            employee_id,
            len(timeline),
            len(result.flags),
            result.overall_risk_score,
        )
        return result

    def analyze_team(
        self,
        records_by_employee: Mapping[str, Iterable[Any]],
        window: AnalysisWindow,
        *,
        config: Optional[AnalyzerConfig] = None,
        now: Optional[datetime] = None,
        only_flagged: bool = False,
        cancel_event: Optional[threading.Event] = None,
        max_workers: Optional[int] = None,
    ) -> list[AnalysisResult]:
        """One independent analysis per employee, highest risk first.

        Setting ``cancel_event`` stops employees that have not started yet;
        analyses already running finish normally.
        """
        now = now or self._clock()
        workers = max(1, int(max_workers or self._max_workers))

        def analyze_one(item):
            employee_id, records = item
            if cancel_event is not None and cancel_event.is_set():
                return None
            return self.analyze(employee_id, records, window, config=config, now=now)

        items = sorted(((str(k), v) for k, v in records_by_employee.items()), key=lambda kv: kv[0])
        with ThreadPoolExecutor(max_workers=workers) as pool:
            results = [r for r in pool.map(analyze_one, items) if r is not None]

        if cancel_event is not None and cancel_event.is_set():
            logger.info("Team analysis cancelled after %s of %s employees", len(results), len(items))

        if only_flagged:
            results = [r for r in results if r.has_flags]
        results.sort(key=lambda r: (-r.overall_risk_score, r.employee_id))
        return results
