import pytest

from src.core.errors import UploadError
from tests.factories import make_file


def test_accept_ignores_missing_files(uploads):
    assert uploads.accept(None, "video") is None
    assert uploads.accept(make_file(filename=""), "video") is None


def test_accept_checks_mime_type(uploads):
    video = make_file()
    assert uploads.accept(video, "video") is video

    with pytest.raises(UploadError, match="Only video files are allowed"):
        uploads.accept(make_file("notes.pdf", "application/pdf"), "video")
    with pytest.raises(UploadError, match="Only image files are allowed"):
        uploads.accept(make_file(), "thumbnail")


def test_save_writes_under_field_directory(uploads, upload_root):
    path = uploads.save(make_file("My Clip.MP4", data=b"frames"), "video")

    assert path.startswith("/uploads/videos/video-")
    assert path.endswith(".mp4")
    stored = upload_root / "videos" / path.rsplit("/", 1)[1]
    assert stored.read_bytes() == b"frames"


def test_saved_names_are_unique(uploads):
    first = uploads.save(make_file(), "video")
    second = uploads.save(make_file(), "video")
    assert first != second


def test_discard_removes_saved_file(uploads, upload_root):
    path = uploads.save(make_file(), "video")
    uploads.discard(path)

    assert list((upload_root / "videos").iterdir()) == []
    # Already gone
    uploads.discard(path)


def test_discard_stays_inside_upload_root(uploads, tmp_path):
    outside = tmp_path / "keep.txt"
    outside.write_text("keep")

    uploads.discard("/uploads/../keep.txt")

    assert outside.exists()
