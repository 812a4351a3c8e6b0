from reportflow.analysis.analyzer import ReportAnalyzer
from reportflow.analysis.factory import AnalyzerFactory
from reportflow.analysis.models import AnalysisResult, VisualizationData

__all__ = ["AnalysisResult", "AnalyzerFactory", "ReportAnalyzer", "VisualizationData"]
