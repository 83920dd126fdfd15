"""Unit tests for the dataset loader."""

import logging
from pathlib import Path

import pytest

from voc_dataset.dataset.loader import iter_samples, load
from voc_dataset.errors import (
    AnnotationParseError,
    AnnotationReadError,
    AnnotationSyntaxError,
    DatasetNotFoundError,
    DatasetReadError,
    FilenameMismatchError,
    InvalidEnumValueError,
)
from voc_dataset.types import LoaderConfig, Pose

from builders import make_annotation, make_object, write_sample


class TestLoad:
    """Tests for load function."""

    def test_single_sample(self, tmp_path):
        """Should pair img1.jpg with Annotations/img1.xml."""
        image_path = write_sample(tmp_path, "img1")

        samples = load(tmp_path)

        assert len(samples) == 1
        assert samples[0].image_path == image_path
        objects = samples[0].annotation.objects
        assert len(objects) == 1
        assert objects[0].name == "dog"
        assert objects[0].pose is Pose.UNSPECIFIED
        assert objects[0].bndbox.xmax == 10.0

    def test_filename_mismatch(self, tmp_path):
        """Should fail the whole load when <filename> names another image."""
        write_sample(tmp_path, "img1", make_annotation(objects=make_object(), filename="wrong.jpg"))

        with pytest.raises(FilenameMismatchError) as exc_info:
            load(tmp_path)

        assert exc_info.value.expected == "img1.jpg"
        assert exc_info.value.actual == "wrong.jpg"
        assert exc_info.value.path == tmp_path / "Annotations" / "img1.xml"

    def test_many_samples(self, tmp_path):
        """Should return one sample per valid pair."""
        stems = {"2008_000001", "2008_000002", "2008_000003", "a", "b"}
        for stem in stems:
            write_sample(tmp_path, stem)

        samples = load(tmp_path)

        assert len(samples) == len(stems)
        assert {s.image_path.stem for s in samples} == stems
        assert {s.annotation.filename for s in samples} == {f"{s}.jpg" for s in stems}

    def test_sorted_by_stem(self, tmp_path):
        """Should order samples by image name by default."""
        for stem in ["c", "a", "b"]:
            write_sample(tmp_path, stem)

        samples = load(tmp_path)

        assert [s.image_path.stem for s in samples] == ["a", "b", "c"]

    def test_unsorted_keeps_membership(self, tmp_path):
        """Should still load every sample when sorting is disabled."""
        for stem in ["c", "a", "b"]:
            write_sample(tmp_path, stem)

        samples = load(tmp_path, LoaderConfig(sort_samples=False))

        assert sorted(s.image_path.stem for s in samples) == ["a", "b", "c"]

    def test_ignores_other_entries(self, tmp_path):
        """Should skip non-jpg files and directories in the image dir."""
        write_sample(tmp_path, "img1")
        image_dir = tmp_path / "JPEGImages"
        (image_dir / "notes.txt").write_text("hello")
        (image_dir / "img2.png").write_bytes(b"")
        (image_dir / "img3.JPG").write_bytes(b"")
        (image_dir / "folder.jpg").mkdir()

        samples = load(tmp_path)

        assert [s.image_path.name for s in samples] == ["img1.jpg"]

    def test_empty_image_dir(self, tmp_path):
        """Should return an empty list when there are no images."""
        (tmp_path / "JPEGImages").mkdir()

        assert load(tmp_path) == []

    def test_missing_image_dir(self, tmp_path):
        """Should raise DatasetNotFoundError without JPEGImages."""
        with pytest.raises(DatasetNotFoundError, match="JPEGImages"):
            load(tmp_path)

    def test_image_dir_is_file(self, tmp_path):
        """Should raise DatasetNotFoundError if JPEGImages is a file."""
        (tmp_path / "JPEGImages").write_text("")

        with pytest.raises(DatasetNotFoundError, match="not a directory"):
            load(tmp_path)

    def test_skips_symlinked_images(self, tmp_path):
        """Should skip an image symlink even when it points at a real jpg."""
        write_sample(tmp_path, "img1")
        outside = tmp_path / "outside.jpg"
        outside.write_bytes(b"")
        (tmp_path / "JPEGImages" / "img2.jpg").symlink_to(outside)

        samples = load(tmp_path)

        assert [s.image_path.name for s in samples] == ["img1.jpg"]

    def test_unlistable_image_dir(self, tmp_path, monkeypatch):
        """Should raise DatasetReadError when the image dir cannot be listed."""
        write_sample(tmp_path, "img1")

        def deny(self):
            raise PermissionError(13, "Permission denied", str(self))

        monkeypatch.setattr(Path, "iterdir", deny)

        with pytest.raises(DatasetReadError, match="cannot list directory") as exc_info:
            load(tmp_path)

        assert exc_info.value.path == tmp_path / "JPEGImages"
        assert isinstance(exc_info.value.__cause__, PermissionError)

    def test_missing_annotation(self, tmp_path):
        """Should raise a read error naming the expected annotation path."""
        write_sample(tmp_path, "img1")
        (tmp_path / "Annotations" / "img1.xml").unlink()

        with pytest.raises(AnnotationReadError) as exc_info:
            load(tmp_path)

        assert exc_info.value.path == tmp_path / "Annotations" / "img1.xml"

    def test_malformed_annotation(self, tmp_path):
        """Should wrap syntax errors with the annotation path."""
        write_sample(tmp_path, "img1", "<annotation><folder>")

        with pytest.raises(AnnotationParseError) as exc_info:
            load(tmp_path)

        assert isinstance(exc_info.value.error, AnnotationSyntaxError)
        assert "img1.xml" in str(exc_info.value)

    def test_one_bad_file_fails_everything(self, tmp_path):
        """Should not return a partial list when a later file is invalid."""
        write_sample(tmp_path, "a")
        write_sample(tmp_path, "b", make_annotation(objects=make_object(pose="Upside"), filename="b.jpg"))
        write_sample(tmp_path, "c")

        with pytest.raises(AnnotationParseError) as exc_info:
            load(tmp_path)

        assert isinstance(exc_info.value.error, InvalidEnumValueError)
        assert exc_info.value.path.name == "b.xml"

    def test_custom_layout(self, tmp_path):
        """Should honor directory names and extensions from config."""
        (tmp_path / "images").mkdir()
        (tmp_path / "labels").mkdir()
        (tmp_path / "images" / "frame.png").write_bytes(b"")
        (tmp_path / "labels" / "frame.voc").write_text(
            make_annotation(objects=make_object(name="car"), filename="frame.png")
        )
        config = LoaderConfig(
            image_dir="images", annotation_dir="labels",
            image_ext="png", annotation_ext="voc",
        )

        samples = load(tmp_path, config)

        assert len(samples) == 1
        assert samples[0].annotation.objects[0].name == "car"

    def test_logs_each_file(self, tmp_path, caplog):
        """Should log every annotation file at INFO."""
        write_sample(tmp_path, "img1")

        with caplog.at_level(logging.INFO, logger="voc_dataset"):
            load(tmp_path)

        assert "Loading" in caplog.text
        assert "img1.xml" in caplog.text


class TestIterSamples:
    """Tests for iter_samples generator."""

    def test_yields_until_failure(self, tmp_path):
        """Should yield earlier samples before raising on a bad one."""
        write_sample(tmp_path, "a")
        write_sample(tmp_path, "b", make_annotation(filename="other.jpg"))

        it = iter_samples(tmp_path)

        assert next(it).image_path.stem == "a"
        with pytest.raises(FilenameMismatchError):
            next(it)
