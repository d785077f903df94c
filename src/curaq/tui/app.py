import signal
import sys
import termios
import tty
from typing import List

from rich.console import Console
from rich.control import Control
from rich.text import Text

from curaq.tui.controller import NavigationController
from curaq.tui.input import ResizeScreen, get_key, handle_winch
from curaq.tui.renderer import render


class AppState:
    """
    Owns the terminal for one interactive session.

    A single loop reads keys, applies background completions and redraws.
    Every state mutation happens on this loop.
    """

    def __init__(self, controller: NavigationController, console: Console = None):
        self.controller = controller
        self.console = console or Console()

    def draw(self) -> None:
        width, height = self.console.size
        self.controller.resize(width, height)
        rows: List[Text] = render(self.controller.state, width, height, self.controller.layout)
        self.console.control(Control.home())
        self.console.print(
            Text("\n").join(rows), end="", no_wrap=True, overflow="crop", crop=True
        )

    def run(self):
        width, height = self.console.size
        self.controller.resize(width, height)
        self.controller.start()

        # Register resize handler
        old_handler = signal.signal(signal.SIGWINCH, handle_winch)

        # Save terminal settings
        fd = sys.stdin.fileno()
        old_settings = termios.tcgetattr(fd)

        try:
            tty.setcbreak(fd)
            with self.console.screen():
                self.console.show_cursor(False)
                should_render = True
                while self.controller.running:
                    if should_render:
                        self.draw()
                        should_render = False

                    try:
                        key = get_key()
                        if key is not None:
                            should_render = self.controller.handle_key(key)
                        # Completions land between key presses, never during one.
                        if self.controller.process_completions():
                            should_render = True
                    except ResizeScreen:
                        self.console.clear()
                        should_render = True
        except KeyboardInterrupt:
            pass  # Handle Ctrl+C gracefully
        finally:
            self.console.show_cursor(True)
            # Restore terminal settings
            termios.tcsetattr(fd, termios.TCSADRAIN, old_settings)
            # Restore signal handler
            signal.signal(signal.SIGWINCH, old_handler)
