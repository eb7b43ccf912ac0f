"""Keyboard input helpers for consolehelper.

Separates keys that count as "pressing a key" from modifier, lock and
media keys that a user may hit without meaning to answer a prompt.
"""

from __future__ import annotations

# Virtual key codes that never count as "pressing a key"
IGNORED_KEY_CODES = frozenset(
    {
        16,   # Shift (left or right)
        17,   # Ctrl (left or right)
        18,   # Alt (left or right)
        19,   # Pause
        20,   # Caps lock
        42,   # Print
        44,   # Print screen
        91,   # Windows key (left)
        92,   # Windows key (right)
        93,   # Menu key
        144,  # Num lock
        145,  # Scroll lock
        166,  # Browser back
        167,  # Browser forward
        168,  # Browser refresh
        169,  # Browser stop
        170,  # Browser search
        171,  # Browser favorites
        172,  # Browser start/home
        173,  # Volume mute
        174,  # Volume down
        175,  # Volume up
        176,  # Next track
        177,  # Previous track
        178,  # Stop media
        179,  # Play/pause media
        180,  # Launch mail
        181,  # Select media
        182,  # Launch application 1
        183,  # Launch application 2
    }
)


def is_input_key(key: int | str) -> bool:
    """Check if key is a real input key rather than a modifier or media key.

    Args:
        key: A virtual key code, or a key string as returned by readchar.
            Terminals never report modifier or media keys on their own, so
            every non-empty string counts. An empty string (unknown escape
            sequence) is ignored.
    """
    if isinstance(key, int):
        return key not in IGNORED_KEY_CODES
    return bool(key)

