"""
TaskSense

A deterministic engine that turns free text (chat messages, shared notes,
voice transcripts) into structured task candidates with a title, category,
priority, due date and confidence, plus the recurrence rollover used when a
repeating task is completed.
"""

__version__ = '0.1.0'

# Re-export key classes for convenience
from .pipeline import (
    TaskExtractionPipeline,
    ExtractionResult,
    extract_tasks,
    Segmenter,
    TemporalResolver,
    LexicalClassifier,
    EntityExtractor,
    ConfidenceScorer,
)
from .models import (
    RawMessage,
    MessageSource,
    Segment,
    TaskCandidate,
    TaskDraft,
    Category,
    Priority,
    RecurrenceSpec,
    RecurrenceType,
)
from .recurrence import next_occurrence
from .repository import (
    TaskRecord,
    TaskRepository,
    InMemoryTaskRepository,
    TaskLifecycle,
    CompletionResult,
)
from .logging import (
    configure_logging,
    get_logger,
    logging_context,
    PipelineTimer,
)
from .errors import (
    TaskSenseError,
    ValidationError,
    InvalidIntervalError,
    RepositoryError,
    TaskNotFoundError,
    TaskAlreadyCompletedError,
)

__all__ = [
    # Version
    '__version__',
    # Main Pipeline
    'TaskExtractionPipeline',
    'ExtractionResult',
    'extract_tasks',
    # Components
    'Segmenter',
    'TemporalResolver',
    'LexicalClassifier',
    'EntityExtractor',
    'ConfidenceScorer',
    # Models
    'RawMessage',
    'MessageSource',
    'Segment',
    'TaskCandidate',
    'TaskDraft',
    'Category',
    'Priority',
    'RecurrenceSpec',
    'RecurrenceType',
    # Recurrence
    'next_occurrence',
    # Repository
    'TaskRecord',
    'TaskRepository',
    'InMemoryTaskRepository',
    'TaskLifecycle',
    'CompletionResult',
    # Logging
    'configure_logging',
    'get_logger',
    'logging_context',
    'PipelineTimer',
    # Errors
    'TaskSenseError',
    'ValidationError',
    'InvalidIntervalError',
    'RepositoryError',
    'TaskNotFoundError',
    'TaskAlreadyCompletedError',
]
