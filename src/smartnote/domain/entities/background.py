"""Background entity for group theming."""

import re
from dataclasses import dataclass
from enum import Enum


class BackgroundKind(Enum):
    """背景の種類"""

    COLOR = "color"
    IMAGE = "image"


HEX_COLOR_PATTERN = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")

DEFAULT_COLOR = "#ffffff"

# Color swatches offered by the group background picker
PRESET_COLORS: tuple[str, ...] = (
    "#FF6B6B",
    "#FFC069",
    "#4ECDC4",
    "#45B7D1",
    "#96CEB4",
    "#FFB3B3",
    "#BFACE2",
    "#A6D1E6",
    "#FFDEB4",
    "#B5D5C5",
    "#F8C4B4",
    "#E8A0BF",
    "#B4E4FF",
    "#95BDFF",
    "#B4CDE6",
    "#FF1E1E",
    "#FF9900",
    "#FFE600",
    "#14FF00",
    "#00FFF0",
    "#0066FF",
    "#9933FF",
    "#FF00FF",
    "#FF0099",
    "#00FF66",
    "#ff4a00",
    "#d5dcdc",
)


@dataclass(frozen=True)
class Background:
    """グループの背景

    Attributes:
        kind: 背景の種類（COLOR / IMAGE）
        value: COLOR の場合は16進カラーコード、IMAGE の場合は画像 URL
    """

    kind: BackgroundKind
    value: str

    def __post_init__(self) -> None:
        """バリデーション"""
        if self.kind is BackgroundKind.COLOR:
            if not HEX_COLOR_PATTERN.match(self.value):
                raise ValueError(f"Invalid hex color: {self.value!r}")
        elif not self.value.strip():
            raise ValueError("Image URL cannot be empty")

    @classmethod
    def color(cls, value: str) -> "Background":
        """単色の背景を生成する"""
        return cls(kind=BackgroundKind.COLOR, value=value)

    @classmethod
    def image(cls, url: str) -> "Background":
        """画像の背景を生成する"""
        return cls(kind=BackgroundKind.IMAGE, value=url)

    @property
    def text_color(self) -> str:
        """背景上に表示する文字色（画像は白、単色は黒）"""
        return "#ffffff" if self.kind is BackgroundKind.IMAGE else "#000000"


def default_background() -> Background:
    """デフォルトの背景（白）を返す"""
    return Background.color(DEFAULT_COLOR)
