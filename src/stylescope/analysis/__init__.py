from stylescope.analysis.analyzer import StylesheetAnalyzer, analyze_project
from stylescope.analysis.cache import AnalysisCache
from stylescope.analysis.report import AnalysisReport, FileAnalysis
from stylescope.analysis.variables import VariableDefinition, VariableUsage, collect_variables

__all__ = [
    "AnalysisCache",
    "AnalysisReport",
    "FileAnalysis",
    "StylesheetAnalyzer",
    "VariableDefinition",
    "VariableUsage",
    "analyze_project",
    "collect_variables",
]
