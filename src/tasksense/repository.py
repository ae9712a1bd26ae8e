"""
Task repository and lifecycle.

Provides:
- TaskRecord: a persisted task with identity and creation time
- TaskRepository: the storage interface the application implements
- InMemoryTaskRepository: dict-backed implementation for tests and scripts
- TaskLifecycle: accepts reviewed candidates and rolls recurring tasks over
  on completion

The extraction engine never touches this module; the application calls it
after the user has reviewed the candidates.
"""

from datetime import date, datetime, time
from typing import Protocol
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field

from .errors import TaskAlreadyCompletedError, TaskNotFoundError
from .logging import get_logger
from .models.recurrence import RecurrenceSpec
from .models.task import Category, Priority, TaskCandidate
from .recurrence import next_occurrence

logger = get_logger(__name__)


class TaskRecord(BaseModel):
    """A stored task occurrence."""

    model_config = ConfigDict(frozen=True)

    id: UUID = Field(default_factory=uuid4)
    created_at: datetime
    title: str = Field(..., min_length=1)
    category: Category = Category.NONE
    priority: Priority = Priority.MEDIUM
    due_date: date | None = None
    due_time: time | None = None
    recurrence: RecurrenceSpec | None = None
    completed_at: datetime | None = None
    source_candidate_confidence: float | None = Field(
        default=None, description='Confidence of the candidate the task was accepted from'
    )
    previous_occurrence_id: UUID | None = Field(
        default=None, description='Occurrence this one was rolled over from'
    )

    @property
    def is_completed(self) -> bool:
        return self.completed_at is not None

    @property
    def due(self) -> datetime | date | None:
        if self.due_date is None:
            return None
        if self.due_time is None:
            return self.due_date
        return datetime.combine(self.due_date, self.due_time)


class TaskRepository(Protocol):
    """Storage interface for task records."""

    def add(self, record: TaskRecord) -> TaskRecord: ...

    def get(self, task_id: UUID) -> TaskRecord | None: ...

    def list(self) -> list[TaskRecord]: ...

    def save(self, record: TaskRecord) -> TaskRecord: ...


class InMemoryTaskRepository:
    """TaskRepository backed by a dict, in insertion order."""

    def __init__(self):
        self._records: dict[UUID, TaskRecord] = {}

    def add(self, record: TaskRecord) -> TaskRecord:
        self._records[record.id] = record
        return record

    def get(self, task_id: UUID) -> TaskRecord | None:
        return self._records.get(task_id)

    def list(self) -> list[TaskRecord]:
        return list(self._records.values())

    def save(self, record: TaskRecord) -> TaskRecord:
        if record.id not in self._records:
            raise TaskNotFoundError(f"Task {record.id} does not exist", context={'task_id': str(record.id)})
        self._records[record.id] = record
        return record


class CompletionResult:
    """Outcome of completing a task occurrence."""

    def __init__(self, completed: TaskRecord, next_task: TaskRecord | None = None):
        self.completed = completed
        self.next_task = next_task

    @property
    def rolled_over(self) -> bool:
        """True if a next occurrence was materialized."""
        return self.next_task is not None


class TaskLifecycle:
    """
    Accept and complete tasks against a repository.

    The only stateful component: all state lives in the repository.
    """

    def __init__(self, repository: TaskRepository):
        """
        Initialize the lifecycle.

        Args:
            repository: Storage for task records
        """
        self.repository = repository

    def accept(
        self,
        candidate: TaskCandidate,
        recurrence: RecurrenceSpec | None = None,
        at: datetime | None = None,
    ) -> TaskRecord:
        """
        Store a user-confirmed candidate as a new task.

        Args:
            candidate: Reviewed candidate
            recurrence: How the task repeats, if it does
            at: Creation timestamp (defaults to now)

        Returns:
            The stored record with its new identity
        """
        record = TaskRecord(
            created_at=at or datetime.now(),
            title=candidate.title,
            category=candidate.category,
            priority=candidate.priority,
            due_date=candidate.due_date,
            due_time=candidate.due_time,
            recurrence=recurrence,
            source_candidate_confidence=candidate.confidence,
        )
        self.repository.add(record)
        logger.info(
            'task_accepted',
            task_id=str(record.id),
            title=record.title,
            recurring=recurrence is not None,
        )
        return record

    def complete(self, task_id: UUID, at: datetime | None = None) -> CompletionResult:
        """
        Mark a task occurrence complete.

        For a recurring task with a due date, the next occurrence is created
        as a new, open record.

        Args:
            task_id: Task to complete
            at: Completion timestamp (defaults to now)

        Returns:
            CompletionResult with the completed record and the next occurrence, if any

        Raises:
            TaskNotFoundError: If no task has this id
            TaskAlreadyCompletedError: If the occurrence is already complete
        """
        record = self.repository.get(task_id)
        if record is None:
            raise TaskNotFoundError(f"Task {task_id} does not exist", context={'task_id': str(task_id)})
        if record.is_completed:
            raise TaskAlreadyCompletedError(
                f"Task {task_id} is already completed",
                context={'task_id': str(task_id), 'completed_at': record.completed_at.isoformat()},
            )

        now = at or datetime.now()
        completed = self.repository.save(record.model_copy(update={'completed_at': now}))
        logger.info('task_completed', task_id=str(task_id))

        if record.recurrence is None or record.due_date is None:
            return CompletionResult(completed)

        next_due = next_occurrence(record.due_date, record.recurrence)
        next_task = TaskRecord(
            created_at=now,
            title=record.title,
            category=record.category,
            priority=record.priority,
            due_date=next_due,
            due_time=record.due_time,
            recurrence=record.recurrence,
            source_candidate_confidence=record.source_candidate_confidence,
            previous_occurrence_id=record.id,
        )
        self.repository.add(next_task)
        logger.info(
            'recurrence_materialized',
            task_id=str(task_id),
            next_task_id=str(next_task.id),
            next_due=next_due.isoformat(),
        )
        return CompletionResult(completed, next_task)
