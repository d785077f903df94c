class Key:
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    PAGE_UP = "page_up"
    PAGE_DOWN = "page_down"
    ENTER = "enter"
    ESCAPE = "escape"
    SPACE = "space"
    BACKSPACE = "backspace"
    CTRL_R = "ctrl_r"
    UNKNOWN = "unknown"
    J = "j"
    K = "k"
    M = "m"
    O = "o"
    Q = "q"
    SHIFT_T = "T"


# Keyboard layout mapping: other layouts -> English, for the bound keys only
LAYOUT_MAP = {
    # Russian layout
    "о": "j",
    "л": "k",
    "ь": "m",
    "щ": "o",
    "й": "q",
    "Е": "T",
}

CONTROL_KEYS = {
    "\x12": Key.CTRL_R,
    "\r": Key.ENTER,
    "\n": Key.ENTER,
    "\x7f": Key.BACKSPACE,
    " ": Key.SPACE,
}

# Final bytes of "ESC [" and "ESC O" sequences
CSI_KEYS = {
    "A": Key.UP,
    "B": Key.DOWN,
    "C": Key.RIGHT,
    "D": Key.LEFT,
}

# "ESC [ <n> ~" sequences
TILDE_KEYS = {
    "5": Key.PAGE_UP,
    "6": Key.PAGE_DOWN,
}
