"""Runtime configuration defaults for persistence, rollover and printing."""

from __future__ import annotations

import os

DB_PATH = os.environ.get("CAISSE_DB_PATH", "data/caisse.db")
DEBUG_LOG_PATH = os.environ.get("CAISSE_DEBUG_LOG", "/tmp/caisse-debug.log")

# Working figures are cleared once per local calendar day at or after this hour.
RESET_CUTOFF_HOUR = int(os.environ.get("CAISSE_RESET_CUTOFF_HOUR", "17"))
RESET_CHECK_INTERVAL_SECONDS = 10.0
SUCCESS_BANNER_SECONDS = 3.0

PRINTER_USB_VENDOR_ID = 0x28E9
PRINTER_USB_PRODUCT_ID = 0x0289
PRINTER_WIDTH_PX = 384
PRINTER_FONT_SIZE = 28
PRINTER_TITLE_FONT_SIZE = 40
PRINTER_FONT_PATH = "/System/Library/Fonts/SFNS.ttf"
PRINTER_LEFT_INDENT_PX = 16
PRINTER_TAIL_SPACER_PX = 70
