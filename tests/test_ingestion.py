"""Tests for the ingestion validator and the file boundary."""

import builtins

import pytest
from PIL import Image
from shared_fixtures import MB, create_test_image_bytes, make_candidate, make_candidates

from wish_gallery.core.image_processor import UNKNOWN_CONTENT_TYPE, sniff_content_type
from wish_gallery.core.ingestion import (
    INVALID_TYPE_MESSAGE,
    IngestionValidator,
    candidate_from_path,
    candidates_from_paths,
)
from wish_gallery.type_defs import RejectionKind


class TestAdmit:
    """Admission policy of IngestionValidator."""

    @pytest.fixture
    def validator(self):
        return IngestionValidator(max_images=5, max_size_mb=2)

    def test_defaults(self):
        validator = IngestionValidator()
        assert validator.max_images == 5
        assert validator.max_size_bytes == 2 * MB

    def test_all_valid_within_capacity(self, validator):
        batch = make_candidates(3)
        result = validator.admit(batch, current_count=0)

        assert result.admitted == batch
        assert result.rejection_reason is None
        assert result.rejections == []

    @pytest.mark.parametrize("current_count,batch_size", [(0, 6), (3, 4), (4, 2), (2, 9)])
    def test_over_capacity_admits_earliest_up_to_remaining(self, validator, current_count, batch_size):
        batch = make_candidates(batch_size)
        result = validator.admit(batch, current_count=current_count)

        assert result.admitted == batch[: 5 - current_count]
        assert result.rejection_reason == "You can only upload 5 images total"

    def test_full_collection_admits_nothing(self, validator):
        result = validator.admit(make_candidates(1), current_count=5)

        assert result.admitted == []
        assert result.rejection_reason == "You can only upload 5 images total"
        assert result.rejections == [RejectionKind.CAPACITY_EXCEEDED]

    def test_count_above_maximum_treated_as_full(self, validator):
        result = validator.admit(make_candidates(2), current_count=7)

        assert result.admitted == []
        assert result.rejections == [RejectionKind.CAPACITY_EXCEEDED]

    @pytest.mark.parametrize("content_type", ["text/plain", "application/pdf", "video/mp4", "", "Image/png"])
    def test_non_image_never_admitted(self, validator, content_type):
        candidate = make_candidate(name="notes.txt", content_type=content_type, size=10)
        result = validator.admit([candidate], current_count=0)

        assert result.admitted == []
        assert result.rejection_reason == INVALID_TYPE_MESSAGE
        assert result.rejections == [RejectionKind.INVALID_TYPE]

    def test_oversized_image_never_admitted(self, validator):
        candidate = make_candidate(size=2 * MB + 1)
        result = validator.admit([candidate], current_count=0)

        assert result.admitted == []
        assert result.rejection_reason == "File size must be less than 2MB"
        assert result.rejections == [RejectionKind.TOO_LARGE]

    def test_exactly_max_size_is_admitted(self, validator):
        candidate = make_candidate(size=2 * MB)
        result = validator.admit([candidate], current_count=0)

        assert result.admitted == [candidate]
        assert result.rejection_reason is None

    def test_type_checked_before_size(self, validator):
        candidate = make_candidate(content_type="text/plain", size=50 * MB)
        result = validator.admit([candidate], current_count=0)

        assert result.rejection_reason == INVALID_TYPE_MESSAGE

    def test_last_rejection_cause_wins(self, validator):
        batch = [
            make_candidate(name="big.png", size=10 * MB),
            make_candidate(name="ok.png"),
            make_candidate(name="notes.txt", content_type="text/plain"),
        ]
        result = validator.admit(batch, current_count=0)

        assert [c.name for c in result.admitted] == ["ok.png"]
        assert result.rejection_reason == INVALID_TYPE_MESSAGE
        assert result.rejections == [RejectionKind.TOO_LARGE, RejectionKind.INVALID_TYPE]

    def test_partial_success_still_reports_rejection(self, validator):
        batch = [make_candidate(name="ok.png"), make_candidate(name="big.png", size=3 * MB)]
        result = validator.admit(batch, current_count=0)

        assert len(result.admitted) == 1
        assert result.rejection_reason == "File size must be less than 2MB"

    def test_capacity_message_takes_priority(self, validator):
        batch = [make_candidate(content_type="text/plain")] + make_candidates(4)
        result = validator.admit(batch, current_count=2)

        assert len(result.admitted) == 2
        assert result.rejection_reason == "You can only upload 5 images total"
        assert result.rejections == [RejectionKind.INVALID_TYPE, RejectionKind.CAPACITY_EXCEEDED]

    def test_only_first_remaining_candidates_are_examined(self, validator):
        """A rejected item inside the window uses up its slot; later valid files are not looked at."""
        batch = [make_candidate(name="a.png"), make_candidate(name="big.png", size=10 * MB)] + make_candidates(2)
        result = validator.admit(batch, current_count=3)

        assert [c.name for c in result.admitted] == ["a.png"]
        assert result.rejection_reason == "You can only upload 5 images total"

    def test_documented_scenario(self, validator):
        """Three accepted, four offered with the third one 10MB: two admitted, capacity message."""
        batch = [
            make_candidate(name="one.png", size=MB),
            make_candidate(name="two.png", size=MB),
            make_candidate(name="huge.png", size=10 * MB),
            make_candidate(name="four.png", size=MB),
        ]
        result = validator.admit(batch, current_count=3)

        assert [c.name for c in result.admitted] == ["one.png", "two.png"]
        assert 3 + len(result.admitted) == 5
        assert result.rejection_reason == "You can only upload 5 images total"

    def test_admit_does_not_mutate_input(self, validator):
        batch = make_candidates(7)
        snapshot = list(batch)
        validator.admit(batch, current_count=0)
        assert batch == snapshot

    def test_custom_limits_in_messages(self):
        validator = IngestionValidator(max_images=3, max_size_mb=1)
        result = validator.admit([make_candidate(size=MB + 1)] + make_candidates(3, size=10), current_count=0)

        assert result.rejection_reason == "You can only upload 3 images total"
        assert validator.message_for(RejectionKind.TOO_LARGE) == "File size must be less than 1MB"


class TestFileBoundary:
    """Reading picked or dropped files into candidates."""

    def test_png_file(self, tmp_path):
        path = tmp_path / "cake.png"
        path.write_bytes(create_test_image_bytes("PNG"))

        candidate = candidate_from_path(str(path))

        assert candidate.name == "cake.png"
        assert candidate.content_type == "image/png"
        assert candidate.size == path.stat().st_size
        assert candidate.payload == path.read_bytes()

    def test_content_type_comes_from_bytes_not_extension(self, tmp_path):
        path = tmp_path / "actually_jpeg.png"
        path.write_bytes(create_test_image_bytes("JPEG"))

        assert candidate_from_path(str(path)).content_type == "image/jpeg"

    def test_text_file(self, tmp_path):
        path = tmp_path / "notes.txt"
        path.write_text("not an image")

        assert candidate_from_path(str(path)).content_type == "text/plain"

    def test_corrupt_image_is_not_an_image(self, tmp_path):
        path = tmp_path / "broken.jpg"
        path.write_bytes(b"\xff\xd8 definitely not a jpeg")

        assert candidate_from_path(str(path)).content_type == UNKNOWN_CONTENT_TYPE

    def test_missing_file_becomes_rejectable_candidate(self, tmp_path):
        candidate = candidate_from_path(str(tmp_path / "gone.png"))

        assert candidate.content_type == UNKNOWN_CONTENT_TYPE
        assert candidate.size == 0
        result = IngestionValidator().admit([candidate], current_count=0)
        assert result.rejection_reason == INVALID_TYPE_MESSAGE

    def test_candidates_keep_input_order(self, tmp_path):
        paths = []
        for i, fmt in enumerate(["PNG", "GIF", "BMP"]):
            path = tmp_path / f"img{i}"
            path.write_bytes(create_test_image_bytes(fmt))
            paths.append(str(path))

        candidates = candidates_from_paths(paths)

        assert [c.name for c in candidates] == ["img0", "img1", "img2"]
        assert [c.content_type for c in candidates] == ["image/png", "image/gif", "image/bmp"]

    def test_sniff_unknown_without_name(self):
        assert sniff_content_type(b"\x00\x01\x02") == UNKNOWN_CONTENT_TYPE

    def test_decompression_bomb_is_rejected_not_raised(self, tmp_path, monkeypatch):
        monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 500)
        bomb = tmp_path / "huge_canvas.png"
        bomb.write_bytes(create_test_image_bytes("PNG", size=(64, 48)))
        fine = tmp_path / "fine.gif"
        fine.write_bytes(create_test_image_bytes("GIF", size=(20, 20)))

        candidates = candidates_from_paths([str(bomb), str(fine)])

        assert candidates[0].content_type == UNKNOWN_CONTENT_TYPE
        result = IngestionValidator().admit(candidates, current_count=0)
        assert [c.name for c in result.admitted] == ["fine.gif"]
        assert result.rejection_reason == INVALID_TYPE_MESSAGE


class TestReadLimits:
    """Files are only loaded when admit() could accept them."""

    @pytest.fixture
    def opened(self, monkeypatch):
        paths = []

        def recording_open(file, *args, **kwargs):
            paths.append(str(file))
            return builtins.open(file, *args, **kwargs)

        monkeypatch.setattr("wish_gallery.core.ingestion.open", recording_open, raising=False)
        return paths

    def test_oversized_file_is_sized_but_not_read(self, tmp_path, opened):
        path = tmp_path / "poster.png"
        path.write_bytes(create_test_image_bytes("PNG") + b"\0" * (3 * MB))

        candidate = candidate_from_path(str(path), max_size_bytes=2 * MB)

        assert opened == []
        assert candidate.payload == b""
        assert candidate.size == path.stat().st_size
        assert candidate.content_type == "image/png"
        result = IngestionValidator().admit([candidate], current_count=0)
        assert result.rejection_reason == "File size must be less than 2MB"

    def test_oversized_non_image_still_reports_type_first(self, tmp_path, opened):
        path = tmp_path / "holiday.txt"
        path.write_bytes(b"x" * (3 * MB))

        candidate = candidate_from_path(str(path), max_size_bytes=2 * MB)

        assert opened == []
        assert IngestionValidator().admit([candidate], current_count=0).rejection_reason == INVALID_TYPE_MESSAGE

    def test_file_at_limit_is_read(self, tmp_path, opened):
        path = tmp_path / "small.png"
        path.write_bytes(create_test_image_bytes("PNG"))

        candidate = candidate_from_path(str(path), max_size_bytes=2 * MB)

        assert opened == [str(path)]
        assert candidate.payload == path.read_bytes()

    def test_only_remaining_slots_are_opened(self, tmp_path, opened):
        paths = []
        for i in range(4):
            path = tmp_path / f"wish{i}.png"
            path.write_bytes(create_test_image_bytes("PNG"))
            paths.append(str(path))
        validator = IngestionValidator()

        candidates = validator.candidates_for_paths(paths, current_count=3)

        assert opened == paths[:2]
        assert [c.name for c in candidates] == ["wish0.png", "wish1.png", "wish2.png", "wish3.png"]
        assert candidates[2].payload == b""
        result = validator.admit(candidates, current_count=3)
        assert [c.name for c in result.admitted] == ["wish0.png", "wish1.png"]
        assert result.rejection_reason == "You can only upload 5 images total"

    def test_full_collection_opens_nothing(self, tmp_path, opened):
        path = tmp_path / "late.png"
        path.write_bytes(create_test_image_bytes("PNG"))

        candidates = IngestionValidator().candidates_for_paths([str(path)], current_count=5)

        assert opened == []
        assert len(candidates) == 1
