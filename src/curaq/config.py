import json
import logging
import os
from dataclasses import dataclass, replace
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional

from appdirs import AppDirs

from curaq.themes import DEFAULT_THEME, THEMES

log = logging.getLogger(__name__)

# Define app-specific details
APP_NAME = "curaq"
APP_AUTHOR = "curaq"
_dirs = AppDirs(APP_NAME, APP_AUTHOR)

TOKEN_ENV_VAR = "CURAQ_MCP_TOKEN"
API_URL_ENV_VAR = "CURAQ_API_URL"
DEFAULT_API_URL = "https://curaq.app/api/v1"

START_SCREENS = ("unread", "read")
DEFAULT_START_SCREEN = "unread"


def get_config_path() -> Path:
    return Path(_dirs.user_config_dir) / "config.json"


def get_api_url() -> str:
    return os.environ.get(API_URL_ENV_VAR) or DEFAULT_API_URL


def setup_logging(debug: bool = False) -> Optional[Path]:
    """
    Configures the root logger.

    The terminal belongs to the full-screen session, so without `debug`
    nothing is emitted. With `debug` everything goes to a file in the user log
    directory, whose path is returned.
    """
    if not debug:
        logging.basicConfig(level=logging.CRITICAL, handlers=[logging.NullHandler()])
        return None

    log_dir = Path(_dirs.user_log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    ts = datetime.now().strftime("%Y%m%dT%H%M%S")
    log_path = log_dir / f"curaq_{ts}_{os.getpid()}.log"

    logging.basicConfig(
        level=logging.DEBUG,
        filename=str(log_path),
        filemode="a",
        format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
    )
    log.debug(f"Debug logging enabled to {log_path}")
    return log_path


@dataclass(frozen=True)
class Settings:
    token: Optional[str] = None
    start_screen: str = DEFAULT_START_SCREEN
    theme: str = DEFAULT_THEME


class SettingsStore:
    """
    Reads and writes the small JSON settings file.

    A missing or broken file yields default settings; it is never fatal.
    Every setter reloads the file first so keys written by other tools
    survive the rewrite.
    """

    def __init__(self, path: Optional[Path] = None):
        self.path = Path(path) if path else get_config_path()

    def _read_raw(self) -> Dict[str, Any]:
        if not self.path.is_file():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            log.warning(f"Ignoring unreadable settings file {self.path}: {e}")
            return {}
        if not isinstance(data, dict):
            log.warning(f"Ignoring settings file {self.path}: not a JSON object")
            return {}
        return data

    def _write_raw(self, data: Dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)
        log.info(f"Saved settings to {self.path}")

    def load(self) -> Settings:
        data = self._read_raw()

        token = data.get("token")
        if not isinstance(token, str) or not token:
            token = None

        start_screen = data.get("startScreen")
        if not isinstance(start_screen, str) or start_screen not in START_SCREENS:
            start_screen = DEFAULT_START_SCREEN

        theme = data.get("theme")
        if not isinstance(theme, str) or theme not in THEMES:
            theme = DEFAULT_THEME

        return Settings(token=token, start_screen=start_screen, theme=theme)

    def save(self, settings: Settings) -> None:
        data = self._read_raw()
        if settings.token:
            data["token"] = settings.token
        else:
            data.pop("token", None)
        data["startScreen"] = settings.start_screen
        data["theme"] = settings.theme
        self._write_raw(data)

    def get_token(self) -> Optional[str]:
        """The environment variable wins over the stored token."""
        env_token = os.environ.get(TOKEN_ENV_VAR)
        if env_token:
            return env_token
        return self.load().token

    def set_token(self, token: str) -> None:
        self.save(replace(self.load(), token=token))

    def clear_token(self) -> None:
        self.save(replace(self.load(), token=None))

    def set_theme(self, name: str) -> None:
        if name not in THEMES:
            raise ValueError(f"Unknown theme: {name}")
        self.save(replace(self.load(), theme=name))

    def set_start_screen(self, screen: str) -> None:
        if screen not in START_SCREENS:
            raise ValueError(f"Unknown start screen: {screen}")
        self.save(replace(self.load(), start_screen=screen))
