"""Unit tests for the mockup generation and editing pipeline."""

import logging

import pytest

from loomlens.core.generation import (
    GeneratedImage,
    edit_mockup,
    generate_mockups,
    run_mockup_batch,
)
from loomlens.core.images import ImageAttachment
from loomlens.core.model_adapters import MissingCredentialsError, ServiceError
from loomlens.core.prompt_builder import build_mockup_tasks
from loomlens.core.selection import toggle_pose


class TestGenerateMockups:
    """Tests for generate_mockups function."""

    def test_one_call_per_pose(self, ready_selection, fake_adapter):
        result = generate_mockups(ready_selection, fake_adapter)

        assert len(fake_adapter.requests) == 2
        assert len(result.images) == 2
        assert result.failed == []

    def test_calls_in_selection_order(self, ready_selection, fake_adapter):
        tasks = build_mockup_tasks(ready_selection)

        generate_mockups(ready_selection, fake_adapter)

        assert [request.prompt for request in fake_adapter.requests] == [
            task.prompt for task in tasks
        ]

    def test_results_keep_task_order(self, ready_selection, fake_adapter, png_factory):
        first = ImageAttachment("image/png", png_factory("yellow"))
        second = ImageAttachment("image/png", png_factory("purple"))
        fake_adapter.responses = [[first], [second]]

        result = generate_mockups(ready_selection, fake_adapter)

        assert [image.image for image in result.images] == [first, second]

    def test_prompt_recorded_on_image(self, ready_selection, fake_adapter):
        result = generate_mockups(ready_selection, fake_adapter)

        assert result.images[0].prompt_used == fake_adapter.requests[0].prompt

    def test_failed_pose_is_skipped(self, ready_selection, fake_adapter):
        """Test that one failing pose does not discard the others."""
        fake_adapter.responses = [ServiceError("quota exceeded")]

        result = generate_mockups(ready_selection, fake_adapter)

        assert len(result.images) == 1
        assert len(result.failed) == 1
        assert result.failed[0].task.pose.id == "pose_walking"
        assert len(fake_adapter.requests) == 2

    def test_empty_response_contributes_nothing(self, ready_selection, fake_adapter):
        fake_adapter.responses = [[], []]

        result = generate_mockups(ready_selection, fake_adapter)

        assert result.images == []
        assert result.failed == []
        assert len(result.empty) == 2

    def test_multiple_images_per_call_all_kept(self, ready_selection, fake_adapter, png_factory):
        images = [ImageAttachment("image/png", png_factory(c)) for c in ("red", "white")]
        fake_adapter.responses = [images, []]

        result = generate_mockups(ready_selection, fake_adapter)

        assert [image.image for image in result.images] == images

    def test_all_failed_yields_empty_result(self, ready_selection, fake_adapter):
        fake_adapter.responses = [ServiceError("down"), ServiceError("down")]

        result = generate_mockups(ready_selection, fake_adapter)

        assert result.images == []
        assert len(result.failed) == 2

    def test_missing_credentials_aborts(self, ready_selection, fake_adapter):
        """Test that a missing key fails before any call is made."""
        fake_adapter.ready_error = MissingCredentialsError("API Key is missing")

        with pytest.raises(MissingCredentialsError):
            generate_mockups(ready_selection, fake_adapter)

        assert fake_adapter.requests == []

    def test_three_poses(self, ready_selection, fake_adapter):
        state = toggle_pose(ready_selection, "pose_side")

        result = generate_mockups(state, fake_adapter)

        assert len(result.images) == 3


class TestRunMockupBatch:
    """Tests for run_mockup_batch progress reporting."""

    def test_progress_callback(self, ready_selection, fake_adapter):
        tasks = build_mockup_tasks(ready_selection)
        calls = []

        run_mockup_batch(tasks, fake_adapter, lambda i, n, task: calls.append((i, n, task)))

        assert calls == [(0, 2, tasks[0]), (1, 2, tasks[1])]


class TestEditMockup:
    """Tests for edit_mockup function."""

    @pytest.fixture
    def source(self, clothing_image) -> GeneratedImage:
        return GeneratedImage.create(clothing_image, "original prompt")

    def test_edit_success(self, source, fake_adapter):
        edited = edit_mockup(source, "make the background darker", fake_adapter)

        assert edited.id != source.id
        assert edited.prompt_used == f'Edit: "make the background darker" based on {source.id}'

    def test_edit_sends_image_then_instruction(self, source, fake_adapter):
        edit_mockup(source, "add a retro filter", fake_adapter)

        request = fake_adapter.requests[0]
        assert request.ordered_parts() == [source.image, "add a retro filter"]

    def test_edit_uses_first_image(self, source, fake_adapter, png_factory):
        first = ImageAttachment("image/png", png_factory("black"))
        second = ImageAttachment("image/png", png_factory("white"))
        fake_adapter.responses = [[first, second]]

        edited = edit_mockup(source, "darker", fake_adapter)

        assert edited.image == first

    def test_edit_without_image_raises(self, source, fake_adapter):
        fake_adapter.responses = [[]]

        with pytest.raises(ServiceError, match="No image generated from edit"):
            edit_mockup(source, "darker", fake_adapter)

    def test_edit_service_error_propagates(self, source, fake_adapter):
        fake_adapter.responses = [ServiceError("boom")]

        with pytest.raises(ServiceError, match="boom"):
            edit_mockup(source, "darker", fake_adapter)

    def test_edit_error_logged_with_traceback(self, source, fake_adapter, caplog):
        fake_adapter.responses = [ServiceError("boom")]

        with caplog.at_level(logging.ERROR, logger="loomlens.core.generation"):
            with pytest.raises(ServiceError):
                edit_mockup(source, "darker", fake_adapter)

        records = [r for r in caplog.records if r.name == "loomlens.core.generation"]
        assert records
        assert records[0].exc_info is not None

    def test_edit_missing_credentials(self, source, fake_adapter):
        fake_adapter.ready_error = MissingCredentialsError("API Key is missing")

        with pytest.raises(MissingCredentialsError):
            edit_mockup(source, "darker", fake_adapter)
