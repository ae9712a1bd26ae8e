#!/usr/bin/env python3
"""
Example: Extract tasks from messages and roll a recurring task over.

This script demonstrates:
1. Extracting task candidates from a few sample messages
2. Accepting a candidate as a recurring task
3. Completing it and materializing the next occurrence

Usage:
    python examples/extract_message.py
    python examples/extract_message.py "Remind me to call the dentist tomorrow at 3pm"
"""

import sys
from datetime import datetime
from pathlib import Path

# Add src to path for imports
src_path = Path(__file__).parent.parent / 'src'
sys.path.insert(0, str(src_path))

from dotenv import load_dotenv

# Load environment variables
env_file = Path(__file__).parent.parent / '.env'
if env_file.exists():
    load_dotenv(env_file)

from tasksense import (
    InMemoryTaskRepository,
    MessageSource,
    RawMessage,
    RecurrenceSpec,
    RecurrenceType,
    TaskExtractionPipeline,
    TaskLifecycle,
)


SAMPLE_MESSAGES = [
    "URGENT: Submit tax documents by tomorrow noon",
    "We need to buy milk, bread, and eggs today",
    "What time is the meeting tomorrow?",
    "Can you remind me to call mom on Sunday at 6pm? Also pay the electricity bill by Friday",
    "Groceries:\n- pick up bread\n- buy coffee beans\n- get vitamins",
    "Hope you have a great day!",
]


def print_candidates(pipeline: TaskExtractionPipeline, message: RawMessage) -> list:
    result = pipeline.run(message)
    print(f"\nMessage: {message.text!r}")
    print(f"  Segments: {len(result.segments)}  Rejected drafts: {len(result.rejected)}")
    if not result.candidates:
        print("  (no tasks)")
    for candidate in result.candidates:
        due = candidate.due.isoformat() if candidate.due else '-'
        print(
            f"  - {candidate.title:<30} {candidate.category.value:<10} "
            f"{candidate.priority.value:<7} due={due:<20} confidence={candidate.confidence:.2f}"
        )
    return result.candidates


def main():
    """Run the example extraction and lifecycle demonstration."""
    print("=" * 60)
    print("Task Extraction Example")
    print("=" * 60)

    reference = datetime(2024, 3, 11, 9, 0)
    pipeline = TaskExtractionPipeline()

    texts = sys.argv[1:] or SAMPLE_MESSAGES
    for text in texts:
        print_candidates(
            pipeline,
            RawMessage(text=text, reference_instant=reference, source=MessageSource.MANUAL),
        )

    # =========================================================================
    # Recurring task lifecycle
    # =========================================================================
    print("\n" + "-" * 60)
    print("Recurring task lifecycle")
    print("-" * 60)

    candidates = print_candidates(
        pipeline,
        RawMessage(text="Pay rent on January 31 at 10am", reference_instant=datetime(2024, 1, 2, 9, 0)),
    )
    if not candidates:
        return

    lifecycle = TaskLifecycle(InMemoryTaskRepository())
    task = lifecycle.accept(candidates[0], recurrence=RecurrenceSpec(type=RecurrenceType.MONTHLY))
    print(f"\nAccepted: {task.title} due {task.due}")

    for _ in range(3):
        outcome = lifecycle.complete(task.id)
        task = outcome.next_task
        print(f"Completed; next occurrence due {task.due}")


if __name__ == "__main__":
    main()
