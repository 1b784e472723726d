from .to_canonical import NormalizationReport, build_record, normalize, normalize_report, summarize

__all__ = ["NormalizationReport", "build_record", "normalize", "normalize_report", "summarize"]
