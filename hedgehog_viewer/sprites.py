"""Pillow-drawn hedgehog sprite and its mirrored twin."""

from PIL import Image, ImageDraw, ImageOps

from .config import COLOR_PALETTE, CREATURE_FOOTPRINT


def draw_hedgehog(size: int = CREATURE_FOOTPRINT) -> Image.Image:
    """A right-facing hedgehog on a transparent square of ``size`` pixels."""
    colors = COLOR_PALETTE["creature"]
    img = Image.new("RGBA", (size, size), (0, 0, 0, 0))
    d = ImageDraw.Draw(img)
    body = (size * 0.08, size * 0.35, size * 0.78, size * 0.85)
    # spikes along the back
    for i in range(6):
        x = size * (0.12 + i * 0.11)
        d.polygon([(x, size * 0.45), (x + size * 0.06, size * 0.18), (x + size * 0.12, size * 0.45)],
                  fill=colors["spikes"])
    d.ellipse(body, fill=colors["body"])
    d.ellipse((size * 0.6, size * 0.5, size * 0.95, size * 0.8), fill=colors["face"])
    d.ellipse((size * 0.74, size * 0.56, size * 0.8, size * 0.62), fill="black")
    d.ellipse((size * 0.91, size * 0.63, size * 0.97, size * 0.69), fill="black")
    for fx in (0.25, 0.55):
        d.ellipse((size * fx, size * 0.8, size * (fx + 0.1), size * 0.92), fill=colors["spikes"])
    return img


def sprite_pair(size: int = CREATURE_FOOTPRINT):
    """Return ``(facing_right, facing_left)`` images."""
    right = draw_hedgehog(size)
    return right, ImageOps.mirror(right)
