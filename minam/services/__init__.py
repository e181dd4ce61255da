"""Service layer wiring the core pipeline to its collaborators."""

from .file_analysis import (AnalysisError, FileAnalyzer,
                            HeuristicFileAnalyzer, OpenAIFileAnalyzer,
                            build_file_analyzer_from_env)
from .query import ProductQuery, filter_rows
from .registry import MinamService

__all__ = [
    "AnalysisError",
    "FileAnalyzer",
    "HeuristicFileAnalyzer",
    "OpenAIFileAnalyzer",
    "build_file_analyzer_from_env",
    "ProductQuery",
    "filter_rows",
    "MinamService",
]
