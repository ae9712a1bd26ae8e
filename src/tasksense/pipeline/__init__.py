"""
Pipeline components for task segmentation, temporal resolution, classification, extraction and scoring.
"""

from .classifier import ActionabilitySignal, CategoryHint, LexicalClassifier
from .extractor import EntityExtractor, clean_title, distribute_list
from .pipeline import ExtractionResult, TaskExtractionPipeline, extract_tasks
from .scorer import ConfidenceScorer
from .segmenter import Segmenter
from .temporal import TemporalResolver

__all__ = [
    # Main Pipeline
    'TaskExtractionPipeline',
    'ExtractionResult',
    'extract_tasks',
    # Segmentation
    'Segmenter',
    # Temporal
    'TemporalResolver',
    # Classification
    'LexicalClassifier',
    'ActionabilitySignal',
    'CategoryHint',
    # Extraction
    'EntityExtractor',
    'clean_title',
    'distribute_list',
    # Scoring
    'ConfidenceScorer',
]
