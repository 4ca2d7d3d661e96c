"""
Sign texture generation.

Renders multi-line text in dark ink on a parchment background and returns
the result as a square PNG texture. The text is laid out on a 4:3 paint
area which is then stretched over the whole texture, matching the aspect
ratio of the in-game sign mesh.
"""

import base64
import io
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Union

from PIL import Image, ImageDraw, ImageFont

TEXTURE_RATIO = 3 / 4
TEXTURE_SIZE = 1024

if TEXTURE_RATIO >= 1:
    PAINT_WIDTH, PAINT_HEIGHT = round(TEXTURE_SIZE / TEXTURE_RATIO), TEXTURE_SIZE
else:
    PAINT_WIDTH, PAINT_HEIGHT = TEXTURE_SIZE, round(TEXTURE_SIZE * TEXTURE_RATIO)

SIGN_BG_COLOR = "#eee7d7"
INK_COLOR = "#000000"

# Line spacing for multi-line text, as a multiple of the font size
LINE_SPACING = 1.3

# Estimated glyph widths in ems, used to pick a font size before measuring
UPPERCASE_WIDTH = 0.75
LOWERCASE_WIDTH = 0.4


def estimate_line_width(line: str) -> float:
    """Estimate the width of a line in ems.

    Characters equal to their upper-case form (capitals, digits, punctuation,
    spaces) count as wide, everything else as narrow.
    """
    return sum(UPPERCASE_WIDTH if char.upper() == char else LOWERCASE_WIDTH for char in line)


def fit_font_size(lines: List[str]) -> float:
    """Largest font size that fits all lines on the paint area."""
    by_height = PAINT_HEIGHT / (len(lines) * LINE_SPACING)
    widest = max(estimate_line_width(line) for line in lines)
    if widest == 0:
        return by_height
    return min(PAINT_WIDTH / widest, by_height)


@dataclass(frozen=True)
class GeneratedTexture:
    """A rendered sign texture.

    Attributes:
        id: Identifier supplied by the requester, echoed back unchanged
        data_url: PNG image as a `data:image/png;base64,...` URL
    """

    id: str
    data_url: str


class SignTextureGenerator:
    """Renders sign textures from text.

    Each call renders onto its own image, so one generator can serve
    several threads.
    """

    def __init__(self, font_path: Optional[Union[str, Path]] = None):
        """Initialize the generator.

        Args:
            font_path: TrueType font for the sign text. Pillow's built-in
                scalable font is used when omitted or missing.
        """
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.font_path = Path(font_path) if font_path else None
        if self.font_path and not self.font_path.exists():
            self.logger.warning(f"Sign font not found: {self.font_path}, using built-in font")
            self.font_path = None

    def _load_font(self, size: int) -> "ImageFont.FreeTypeFont | ImageFont.ImageFont":
        if self.font_path:
            return ImageFont.truetype(str(self.font_path), size)
        return ImageFont.load_default(size=size)

    def render(self, text: str) -> Image.Image:
        """Render text onto a square RGB texture.

        Args:
            text: Sign text, lines separated by newlines

        Returns:
            TEXTURE_SIZE x TEXTURE_SIZE image
        """
        lines = text.split("\n")
        font_size = max(1, int(fit_font_size(lines)))
        font = self._load_font(font_size)

        paint = Image.new("RGB", (PAINT_WIDTH, PAINT_HEIGHT), SIGN_BG_COLOR)
        draw = ImageDraw.Draw(paint)

        line_height = font_size * (LINE_SPACING if len(lines) > 1 else 1)
        text_top = PAINT_HEIGHT * 0.5 - line_height * len(lines) * 0.5

        for line_index, line in enumerate(lines):
            line_width = draw.textlength(line, font=font)
            draw.text(
                (PAINT_WIDTH * 0.5 - line_width * 0.5, text_top + line_index * line_height),
                line,
                fill=INK_COLOR,
                font=font,
            )

        self.logger.debug(f"Rendered sign with {len(lines)} line(s) at {font_size}px")
        return paint.resize((TEXTURE_SIZE, TEXTURE_SIZE), Image.Resampling.BILINEAR)

    def render_png(self, text: str) -> bytes:
        """Render text and encode the texture as PNG."""
        buffer = io.BytesIO()
        self.render(text).save(buffer, format="PNG")
        return buffer.getvalue()

    def generate(self, texture_id: str, text: str) -> GeneratedTexture:
        """Render a texture for a `generateTexture(id, text)` request."""
        encoded = base64.b64encode(self.render_png(text)).decode("ascii")
        return GeneratedTexture(id=texture_id, data_url=f"data:image/png;base64,{encoded}")
