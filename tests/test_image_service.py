from PIL import Image
import pytest

from infrastructure.image_service import ImageService, thumbnail_size


def test_thumbnail_size_keeps_aspect():
    assert thumbnail_size(4000, 3000, 200) == (267, 200)
    assert thumbnail_size(1920, 1080, 200) == (356, 200)
    assert thumbnail_size(100, 100, 200) == (200, 200)


def test_thumbnail_size_rejects_zero_height():
    with pytest.raises(ValueError):
        thumbnail_size(100, 0, 200)


def test_save_scaled_truncates(tmp_path, make_jpeg):
    src = make_jpeg(tmp_path / "src.jpg", size=(81, 61))
    dest = tmp_path / "out" / "half.jpg"

    assert ImageService().save_scaled(str(src), str(dest)) == (40, 30)
    with Image.open(dest) as im:
        assert im.size == (40, 30)
        assert im.format == "JPEG"


def test_save_thumbnail(tmp_path, make_jpeg):
    src = make_jpeg(tmp_path / "src.jpg", size=(800, 600))
    dest = tmp_path / "thumb.jpg"

    assert ImageService().save_thumbnail(str(src), str(dest), 200) == (267, 200)
    with Image.open(dest) as im:
        assert im.size == (267, 200)


def test_save_converts_non_rgb(tmp_path):
    src = tmp_path / "src.png"
    Image.new("RGBA", (20, 20), (10, 20, 30, 128)).save(src)
    dest = tmp_path / "half.jpg"

    ImageService().save_scaled(str(src), str(dest))
    with Image.open(dest) as im:
        assert im.mode == "RGB"


def test_load_failure_raises_oserror(tmp_path):
    broken = tmp_path / "broken.jpg"
    broken.write_bytes(b"")
    with pytest.raises(OSError):
        ImageService().save_scaled(str(broken), str(tmp_path / "x.jpg"))
