import os
import select
import sys
from typing import Optional

from curaq.tui.keys import CONTROL_KEYS, CSI_KEYS, LAYOUT_MAP, TILDE_KEYS, Key

POLL_INTERVAL = 0.1


# Resize handling
class ResizeScreen(Exception):
    pass


resize_needed = False


def handle_winch(signum, frame):
    global resize_needed
    resize_needed = True


def _utf8_length(byte1: int) -> int:
    if (byte1 & 0x80) == 0:
        return 1
    if (byte1 & 0xE0) == 0xC0:
        return 2
    if (byte1 & 0xF0) == 0xE0:
        return 3
    if (byte1 & 0xF8) == 0xF0:
        return 4
    return 1


def _read_escape_sequence(fd: int) -> str:
    # A lone ESC has nothing queued behind it.
    r, _, _ = select.select([fd], [], [], 0)
    if not r:
        return Key.ESCAPE

    try:
        ch2 = os.read(fd, 1).decode()
        if ch2 not in ("[", "O"):
            return Key.ESCAPE
        ch3 = os.read(fd, 1).decode()
        if ch3 in CSI_KEYS:
            return CSI_KEYS[ch3]
        if ch2 == "[" and ch3 in TILDE_KEYS:
            ch4 = os.read(fd, 1).decode()
            if ch4 == "~":
                return TILDE_KEYS[ch3]
    except (OSError, UnicodeDecodeError):
        pass
    return Key.UNKNOWN


def get_key(timeout: float = POLL_INTERVAL) -> Optional[str]:
    """
    Reads one key press and decodes escape sequences.

    Returns None when nothing arrives within `timeout`, and raises
    ResizeScreen once after the terminal has been resized. Printable
    characters are returned as typed, so "T" and "t" stay distinct.
    """
    global resize_needed

    fd = sys.stdin.fileno()

    if resize_needed:
        resize_needed = False
        raise ResizeScreen()

    try:
        r, _, _ = select.select([fd], [], [], timeout)
        if not r:
            return None
    except (OSError, InterruptedError):
        return None

    try:
        raw_bytes = os.read(fd, 1)
    except OSError:
        return Key.UNKNOWN
    if not raw_bytes:
        return Key.UNKNOWN

    seq_len = _utf8_length(raw_bytes[0])
    if seq_len > 1:
        try:
            raw_bytes += os.read(fd, seq_len - 1)
        except OSError:
            pass

    try:
        ch = raw_bytes.decode("utf-8")
    except UnicodeDecodeError:
        return Key.UNKNOWN

    if ch == "\x1b":
        return _read_escape_sequence(fd)

    if ch in CONTROL_KEYS:
        return CONTROL_KEYS[ch]

    # Convert from other keyboard layouts to English
    return LAYOUT_MAP.get(ch, ch)
