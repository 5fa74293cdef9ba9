"""测试配置文件。

提供测试所需的fixtures和配置。
"""

import tempfile
from pathlib import Path

import pytest
from PIL import Image, ImageDraw

from py_image_codec_mcp.config import reset_config


SVG_SOURCE = (
    '<svg xmlns="http://www.w3.org/2000/svg" width="10" height="10">'
    '<rect width="10" height="10" fill="red"/></svg>'
)


def _draw_pattern(img: Image.Image) -> None:
    """画一些色块，避免图片过于单一"""
    draw = ImageDraw.Draw(img)
    for i in range(10):
        x, y = (i * 12) % img.width, (i * 7) % img.height
        draw.rectangle([x, y, x + 20, y + 15], fill=(i * 25, 255 - i * 20, i * 11))


@pytest.fixture
def temp_dir():
    """临时目录fixture"""
    with tempfile.TemporaryDirectory() as temp_dir:
        yield Path(temp_dir)


@pytest.fixture
def sample_images(temp_dir: Path) -> dict[str, Path]:
    """生成各种可识别格式的测试图片"""
    images_dir = temp_dir / "images"
    images_dir.mkdir()

    img = Image.new("RGB", (120, 80), color="white")
    _draw_pattern(img)

    images = {
        "png": images_dir / "sample.png",
        "jpeg": images_dir / "photo.jpeg",
        "gif": images_dir / "anim.gif",
        "webp": images_dir / "banner.webp",
    }
    img.save(images["png"], "PNG")
    img.save(images["jpeg"], "JPEG", quality=80)
    img.convert("P").save(images["gif"], "GIF")
    img.save(images["webp"], "WEBP", quality=75)

    images["svg"] = images_dir / "icon.svg"
    images["svg"].write_text(SVG_SOURCE, encoding="utf-8")

    # 不可识别的扩展名
    images["jpg"] = images_dir / "legacy.jpg"
    img.save(images["jpg"], "JPEG")

    return images


@pytest.fixture
def output_dir(temp_dir: Path) -> Path:
    """输出目录fixture"""
    output_dir = temp_dir / "output"
    output_dir.mkdir(parents=True, exist_ok=True)
    return output_dir


@pytest.fixture(autouse=True)
def clean_config(monkeypatch):
    """每个测试使用干净的环境变量配置"""
    for name in (
        "IMC_DEFAULT_ENCODING",
        "IMC_FEATURES",
        "IMC_MAX_WORKERS",
        "IMC_MAX_FILE_SIZE_KIB",
        "IMC_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    reset_config()
    yield
    reset_config()
