"""Mockup generation and editing pipeline.

A batch is an ordered list of MockupTasks, one per selected pose. Tasks run
one at a time in selection order. Each task's outcome is captured on its own:
a task that raises is logged and recorded as failed, a task whose response
holds no image simply contributes nothing. The batch result is the ordered
concatenation of every image produced.

Only a failure before any task runs (for example a missing API key) aborts
the whole batch.

Editing is stricter: one call, exactly one image expected, and no image is an
error.
"""

import logging
import uuid
from collections.abc import Callable, Iterator, Sequence
from dataclasses import dataclass, field
from datetime import datetime

from .images import ImageAttachment
from .model_adapters import ImageAdapterBase, ServiceError
from .prompt_builder import (
    MockupTask,
    build_edit_request,
    build_mockup_tasks,
    edit_prompt_label,
)
from .selection import SelectionState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GeneratedImage:
    """A synthesized mockup and the prompt that produced it."""

    id: str
    image: ImageAttachment
    prompt_used: str
    created_at: datetime

    @classmethod
    def create(cls, image: ImageAttachment, prompt_used: str) -> "GeneratedImage":
        return cls(
            id=uuid.uuid4().hex,
            image=image,
            prompt_used=prompt_used,
            created_at=datetime.now(),
        )


@dataclass
class TaskOutcome:
    """Result of running one mockup task."""

    task: MockupTask
    images: list[GeneratedImage] = field(default_factory=list)
    error: Exception | None = None

    @property
    def succeeded(self) -> bool:
        return self.error is None


@dataclass
class BatchResult:
    """Folded outcomes of a mockup batch."""

    outcomes: list[TaskOutcome] = field(default_factory=list)

    @property
    def images(self) -> list[GeneratedImage]:
        """All images produced, in task order."""
        return [image for outcome in self.outcomes for image in outcome.images]

    @property
    def failed(self) -> list[TaskOutcome]:
        return [outcome for outcome in self.outcomes if not outcome.succeeded]

    @property
    def empty(self) -> list[TaskOutcome]:
        """Tasks that ran without error but returned no image."""
        return [o for o in self.outcomes if o.succeeded and not o.images]


def run_mockup_task(task: MockupTask, adapter: ImageAdapterBase) -> TaskOutcome:
    """Run one task, capturing any failure in the outcome."""
    try:
        attachments = adapter.synthesize(task.to_request())
    except Exception as e:
        logger.error(f"Error generating mockup for pose {task.pose.name}: {e}", exc_info=True)
        return TaskOutcome(task=task, error=e)

    if not attachments:
        logger.warning(f"No image returned for pose {task.pose.name}")

    images = [GeneratedImage.create(image, task.prompt) for image in attachments]
    return TaskOutcome(task=task, images=images)


TaskStartCallback = Callable[[int, int, MockupTask], None]


def iter_mockup_batch(
    tasks: Sequence[MockupTask],
    adapter: ImageAdapterBase,
    on_task_start: TaskStartCallback | None = None,
) -> Iterator[TaskOutcome]:
    """Run tasks sequentially, yielding each outcome as it completes.

    Args:
        tasks: Tasks in dispatch order
        adapter: Image adapter to call
        on_task_start: Called with (index, total, task) before each call
    """
    total = len(tasks)
    for index, task in enumerate(tasks):
        if on_task_start is not None:
            on_task_start(index, total, task)
        yield run_mockup_task(task, adapter)


def run_mockup_batch(
    tasks: Sequence[MockupTask],
    adapter: ImageAdapterBase,
    on_task_start: TaskStartCallback | None = None,
) -> BatchResult:
    """Run every task and fold the outcomes."""
    result = BatchResult(outcomes=list(iter_mockup_batch(tasks, adapter, on_task_start)))
    logger.info(
        f"Batch complete: {len(result.images)} image(s) from {len(result.outcomes)} task(s), "
        f"{len(result.failed)} failed"
    )
    return result


def generate_mockups(
    state: SelectionState,
    adapter: ImageAdapterBase,
    on_task_start: TaskStartCallback | None = None,
) -> BatchResult:
    """Generate one mockup per selected pose.

    Args:
        state: Selection for which can_generate() is true
        adapter: Image adapter to call
        on_task_start: Optional progress callback, see iter_mockup_batch

    Returns:
        BatchResult, possibly with fewer images than poses

    Raises:
        MissingCredentialsError: If the adapter has no API key
        ValueError: If the selection does not resolve to a valid configuration
    """
    adapter.ensure_ready()
    tasks = build_mockup_tasks(state)
    return run_mockup_batch(tasks, adapter, on_task_start)


def edit_mockup(
    image: GeneratedImage, instruction: str, adapter: ImageAdapterBase
) -> GeneratedImage:
    """Apply a text instruction to a generated image.

    Args:
        image: Image to edit
        instruction: Free-text edit instruction
        adapter: Image adapter to call

    Returns:
        The newly generated image

    Raises:
        ServiceError: If the call fails or returns no image
    """
    adapter.ensure_ready()
    try:
        attachments = adapter.synthesize(build_edit_request(image.image, instruction))
    except Exception as e:
        logger.error(f"Error editing mockup: {e}", exc_info=True)
        raise

    if not attachments:
        logger.error("Error editing mockup: no image in response")
        raise ServiceError("No image generated from edit")

    edited = GeneratedImage.create(attachments[0], edit_prompt_label(instruction, image.id))
    logger.info(f"Edited mockup {image.id} -> {edited.id}")
    return edited
