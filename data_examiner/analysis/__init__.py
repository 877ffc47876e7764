"""
Analysis Package - Orchestration around the external analysis service

Core Components:
- AnalysisOrchestrator: parse, profile, chart, ask, reconcile, record
- AnalysisClient: OpenAI-compatible chat client with timeout handling
- parse_analysis_response: markdown plus optional fenced chart description
- build_fallback_analysis: templated summary from local statistics
"""

from .orchestrator import AnalysisOrchestrator, AnalysisResult, extract_insights, placeholder_dataset
from .client import AnalysisClient, AnalysisRequest
from .response import ParsedResponse, clean_response, parse_analysis_response
from .fallback import build_fallback_analysis

__all__ = [
    'AnalysisOrchestrator',
    'AnalysisResult',
    'AnalysisClient',
    'AnalysisRequest',
    'ParsedResponse',
    'build_fallback_analysis',
    'clean_response',
    'extract_insights',
    'parse_analysis_response',
    'placeholder_dataset',
]
