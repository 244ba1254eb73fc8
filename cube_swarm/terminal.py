"""
Terminal output: ANSI escapes and frame-to-text conversion.
"""

import ctypes
import os
import sys

from .cube import Color

RESET = "\033[0m"

COLOR_CODES = {
    Color.RED: "\033[31m",
    Color.GREEN: "\033[32m",
    Color.YELLOW: "\033[33m",
    Color.BLUE: "\033[34m",
    Color.MAGENTA: "\033[35m",
    Color.CYAN: "\033[36m",
    Color.WHITE: "\033[37m",
}


# --- Windows ANSI Support ---
def enable_windows_ansi():
    if os.name == "nt":
        kernel32 = ctypes.windll.kernel32
        hStdOut = kernel32.GetStdHandle(-11)
        mode = ctypes.c_ulong()
        kernel32.GetConsoleMode(hStdOut, ctypes.byref(mode))
        mode.value |= 4  # ENABLE_VIRTUAL_TERMINAL_PROCESSING
        kernel32.SetConsoleMode(hStdOut, mode)


def hide_cursor():
    sys.stdout.write("\033[?25l")


def show_cursor():
    sys.stdout.write("\033[?25h")


def move_cursor(x, y):
    sys.stdout.write(f"\033[{y};{x}H")


def clear_screen():
    sys.stdout.write("\033[2J")


def reset_style():
    sys.stdout.write(RESET)


def frame_to_text(frame, color=True):
    """
    Render a FrameBuffer as printable text, one line per grid row.

    Escape codes are only emitted when the color changes along a row.
    """
    lines = []
    for row in frame.rows():
        if not color:
            lines.append("".join(glyph for glyph, _ in row))
            continue

        parts = []
        current = Color.NONE
        for glyph, tag in row:
            if tag is not current:
                parts.append(COLOR_CODES.get(tag, RESET))
                current = tag
            parts.append(glyph)
        if current is not Color.NONE:
            parts.append(RESET)
        lines.append("".join(parts))
    return "\n".join(lines)


def draw(frame, color=True):
    move_cursor(1, 1)
    sys.stdout.buffer.write(frame_to_text(frame, color).encode("utf-8"))
    sys.stdout.flush()
