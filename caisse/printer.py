"""Thermal printing of the consolidated deposit slip."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from time import sleep

from caisse.config import (
    PRINTER_FONT_PATH,
    PRINTER_FONT_SIZE,
    PRINTER_LEFT_INDENT_PX,
    PRINTER_TAIL_SPACER_PX,
    PRINTER_TITLE_FONT_SIZE,
    PRINTER_USB_PRODUCT_ID,
    PRINTER_USB_VENDOR_ID,
    PRINTER_WIDTH_PX,
)
from caisse.constant import MOBILE_MONEY_LABELS
from caisse.models import DepositFigures
from caisse.rendering import format_amount

_SEPARATOR_HEIGHT_PX = 20
_SEPARATOR_THICKNESS_PX = 3
_SEPARATOR_STRIPE_HEIGHT_PX = 2
_SEPARATOR_PAUSE_SECONDS = 0.1
_LINE_EXTRA_PX = 14
_RIGHT_GUTTER_PX = 8
_FONT_OVERRIDE_ENV = "CAISSE_PRINTER_FONT_PATH"
_LINUX_FONT_FALLBACKS = (
    "/usr/share/fonts/TTF/DejaVuSans.ttf",
    "/usr/share/fonts/dejavu/DejaVuSans.ttf",
    "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
    "/usr/share/fonts/noto/NotoSans-Regular.ttf",
    "/usr/share/fonts/liberation/LiberationSans-Regular.ttf",
)


@dataclass(frozen=True)
class SlipLine:
    """One printed row. ``kind`` is ``title``, ``line`` or ``separator``."""

    label: str = ""
    value: str = ""
    kind: str = "line"


def deposit_slip_lines(figures: DepositFigures, display_date: str) -> list[SlipLine]:
    """Lay out the deposit slip: title, date, one row per channel, total."""
    return [
        SlipLine("VERSEMENT", kind="title"),
        SlipLine(display_date),
        SlipLine(kind="separator"),
        SlipLine("Espèces", format_amount(figures.cash)),
        SlipLine(MOBILE_MONEY_LABELS["orange"], format_amount(figures.orange_money)),
        SlipLine(MOBILE_MONEY_LABELS["wave"], format_amount(figures.wave_pay)),
        SlipLine(kind="separator"),
        SlipLine("TOTAL", format_amount(figures.total)),
    ]


def resolve_printer_font_path() -> str:
    """
    Resolve a printer font path.

    Resolution order:
    1. CAISSE_PRINTER_FONT_PATH (if set)
    2. PRINTER_FONT_PATH
    3. Known Linux fallbacks
    """
    env_override = os.environ.get(_FONT_OVERRIDE_ENV, "").strip()
    candidates: list[str] = []
    if env_override:
        candidates.append(env_override)
    candidates.append(PRINTER_FONT_PATH)
    candidates.extend(_LINUX_FONT_FALLBACKS)

    seen: set[str] = set()
    for candidate in candidates:
        if not candidate or candidate in seen:
            continue
        seen.add(candidate)
        if Path(candidate).is_file():
            return candidate

    raise RuntimeError(
        f"No usable printer font found. Set {_FONT_OVERRIDE_ENV} to a valid .ttf/.otf file. "
        f"Tried: {', '.join(seen)}"
    )


def check_printer_dependencies() -> tuple[bool, str]:
    """Check whether printer dependencies are importable."""
    try:
        from escpos.printer import Usb  # noqa: F401
        from PIL import ImageFont

        ImageFont.truetype(resolve_printer_font_path(), PRINTER_FONT_SIZE)
    except Exception as exc:
        return (False, f"Imprimante indisponible: {exc}")
    return (True, "Imprimante prête")


def _render_row(line: SlipLine, font: object) -> object:
    from PIL import Image, ImageDraw

    probe = ImageDraw.Draw(Image.new("1", (1, 1), color=1))
    bbox = probe.textbbox((0, 0), line.label or " ", font=font)
    text_height = bbox[3] - bbox[1]
    canvas_height = text_height + _LINE_EXTRA_PX

    img = Image.new("1", (PRINTER_WIDTH_PX, canvas_height), color=1)
    draw = ImageDraw.Draw(img)
    # Offset by bbox top so descenders are not clipped.
    y = (canvas_height - text_height) // 2 - bbox[1]
    draw.text((PRINTER_LEFT_INDENT_PX, y), line.label, font=font, fill=0)
    if line.value:
        value_bbox = draw.textbbox((0, 0), line.value, font=font)
        x = PRINTER_WIDTH_PX - _RIGHT_GUTTER_PX - (value_bbox[2] - value_bbox[0]) - value_bbox[0]
        draw.text((x, y), line.value, font=font, fill=0)
    return img


def _render_spacer(height_px: int) -> object:
    from PIL import Image

    return Image.new("1", (PRINTER_WIDTH_PX, max(1, height_px)), color=1)


def _print_separator(printer: object) -> None:
    """Print the separator in short stripes so the bar stays crisp on thermal paper."""
    from PIL import Image, ImageDraw

    separator = Image.new("1", (PRINTER_WIDTH_PX, _SEPARATOR_HEIGHT_PX), color=1)
    top = (_SEPARATOR_HEIGHT_PX - _SEPARATOR_THICKNESS_PX) // 2
    ImageDraw.Draw(separator).rectangle((0, top, PRINTER_WIDTH_PX - 1, top + _SEPARATOR_THICKNESS_PX - 1), fill=0)
    for stripe_top in range(0, separator.height, _SEPARATOR_STRIPE_HEIGHT_PX):
        bottom = min(separator.height, stripe_top + _SEPARATOR_STRIPE_HEIGHT_PX)
        printer.image(separator.crop((0, stripe_top, PRINTER_WIDTH_PX, bottom)))
        if bottom < separator.height:
            sleep(_SEPARATOR_PAUSE_SECONDS)


def print_deposit_slip(figures: DepositFigures, display_date: str) -> None:
    """Print the deposit slip and cut the ticket."""
    try:
        from escpos.printer import Usb
        from PIL import ImageFont
    except Exception as exc:
        raise RuntimeError(f"Printer dependencies unavailable: {exc}") from exc

    font_path = resolve_printer_font_path()
    font = ImageFont.truetype(font_path, PRINTER_FONT_SIZE)
    title_font = ImageFont.truetype(font_path, PRINTER_TITLE_FONT_SIZE)
    printer = Usb(PRINTER_USB_VENDOR_ID, PRINTER_USB_PRODUCT_ID)

    for line in deposit_slip_lines(figures, display_date):
        if line.kind == "separator":
            _print_separator(printer)
            continue
        printer.image(_render_row(line, title_font if line.kind == "title" else font))

    printer.image(_render_spacer(PRINTER_TAIL_SPACER_PX))
    printer.cut()
