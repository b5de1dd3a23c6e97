"""CLI utilities: formatting, logging mute/restore."""

import logging
from decimal import Decimal


def fmt_brl(v) -> str:
    """Format amount in Brazilian reais (e.g. R$ 1.234,56 / -R$ 10,00)."""
    d = Decimal(str(v))
    text = f"{abs(d):,.2f}".replace(",", "_").replace(".", ",").replace("_", ".")
    return f"-R$ {text}" if d < 0 else f"R$ {text}"


def enable_quiet_logging():
    """Mute console handlers so CLI output stays clean. Returns list to pass to restore_logging."""
    sk_logger = logging.getLogger("store_kernel")
    muted = []
    for h in sk_logger.handlers:
        if isinstance(h, logging.StreamHandler) and not isinstance(h, logging.FileHandler):
            muted.append((h, h.level))
            h.setLevel(logging.CRITICAL + 1)
    return muted


def restore_logging(muted):
    """Restore muted handlers after a quiet-logging section."""
    for h, orig_level in muted:
        h.setLevel(orig_level)
