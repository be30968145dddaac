import io

import pytest
from PIL import Image

from core.image_utils import ImageBlob


def make_image_bytes(width, height, fmt="PNG"):
    img = Image.new("RGB", (width, height), color=(200, 120, 40))
    buf = io.BytesIO()
    img.save(buf, format=fmt)
    return buf.getvalue()


@pytest.fixture
def make_blob():
    def _make(width=64, height=48, fmt="PNG", mime_type="image/png", filename="label.png"):
        return ImageBlob(
            data=make_image_bytes(width, height, fmt=fmt),
            mime_type=mime_type,
            filename=filename,
        )
    return _make


@pytest.fixture
def terms_file(tmp_path):
    path = tmp_path / "unhealthy_ingredients.txt"
    path.write_text("sugar\nmsg\npalm oil\n", encoding="utf-8")
    return path
