from dataclasses import dataclass
from typing import Dict, List


@dataclass(frozen=True)
class Theme:
    name: str
    primary: str
    secondary: str
    accent: str
    unread: str
    read: str
    border: str
    text: str
    text_dim: str


DEFAULT_THEME = "default"

# Values are rich color names.
THEMES: Dict[str, Theme] = {
    "default": Theme(
        name="default",
        primary="cyan",
        secondary="green",
        accent="yellow",
        unread="yellow",
        read="green",
        border="cyan",
        text="white",
        text_dim="grey50",
    ),
    "ocean": Theme(
        name="ocean",
        primary="blue",
        secondary="cyan",
        accent="magenta",
        unread="cyan",
        read="blue",
        border="blue",
        text="white",
        text_dim="grey50",
    ),
    "forest": Theme(
        name="forest",
        primary="green",
        secondary="yellow",
        accent="cyan",
        unread="yellow",
        read="green",
        border="green",
        text="white",
        text_dim="grey50",
    ),
    "sunset": Theme(
        name="sunset",
        primary="magenta",
        secondary="red",
        accent="yellow",
        unread="yellow",
        read="red",
        border="magenta",
        text="white",
        text_dim="grey50",
    ),
    "mono": Theme(
        name="mono",
        primary="white",
        secondary="grey50",
        accent="white",
        unread="white",
        read="grey50",
        border="grey50",
        text="white",
        text_dim="grey50",
    ),
}


def theme_names() -> List[str]:
    return list(THEMES.keys())


def get_theme(name: str) -> Theme:
    return THEMES.get(name, THEMES[DEFAULT_THEME])
