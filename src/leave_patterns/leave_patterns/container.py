from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .analysis.config import AnalyzerConfig
from .analysis.detectors.factory import DetectorFactory
from .analysis.normalizer import LeaveNormalizer
from .analysis.report import ReportBuilder
from .analysis.service import LeavePatternService
from .core.constants import DEFAULT_MAX_WORKERS


@dataclass(frozen=True)
class Container:
    analyzer_config: AnalyzerConfig
    detector_factory: DetectorFactory
    leave_pattern_service: LeavePatternService


def build_container(
    *,
    analyzer_config: Optional[dict] = None,
    detectors: Optional[list] = None,
    max_workers: int = DEFAULT_MAX_WORKERS,
) -> Container:
    config = AnalyzerConfig.from_mapping(analyzer_config or {})
    detector_factory = DetectorFactory()

    leave_pattern_service = LeavePatternService(
        config,
        detectors=detector_factory.build(detectors or None),
        normalizer=LeaveNormalizer(),
        report_builder=ReportBuilder(),
        max_workers=max_workers,
    )

    return Container(
        analyzer_config=config,
        detector_factory=detector_factory,
        leave_pattern_service=leave_pattern_service,
    )
