import logging
import platform
import subprocess
import sys
import webbrowser
from typing import List

logger = logging.getLogger(__name__)


def _is_wsl() -> bool:
    release_lower = platform.release().lower()
    return "microsoft-standard" in release_lower or "wsl" in release_lower


def open_command(url: str) -> List[str]:
    if sys.platform == "darwin":
        return ["open", url]
    if sys.platform == "win32":
        return ["cmd", "/c", "start", "", url]
    if _is_wsl():
        return ["explorer.exe", url]
    return ["xdg-open", url]


def open_url(url: str) -> None:
    """Hands `url` to the desktop's default opener without waiting for it."""
    cmd = open_command(url)
    try:
        subprocess.Popen(
            cmd,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            start_new_session=True,
        )
    except OSError as e:
        logger.warning(f"Could not run {cmd[0]} for {url}: {e}; using webbrowser")
        webbrowser.open(url)
