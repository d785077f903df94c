import logging
import queue
import threading
from dataclasses import dataclass
from typing import Any, Callable, List, Optional

logger = logging.getLogger(__name__)


@dataclass
class Completion:
    """Outcome of a background job, applied later on the input loop."""

    kind: str
    tag: Any
    result: Any = None
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class BackgroundRunner:
    """
    Runs blocking calls on daemon threads.

    Threads never touch UI state: each one only puts a Completion on a queue
    that the single input loop drains between key presses. Jobs cannot be
    cancelled; callers tag them and drop completions they no longer want.
    """

    def __init__(self):
        self.completions: "queue.Queue[Completion]" = queue.Queue()

    def submit(self, kind: str, fn: Callable[..., Any], *args: Any, tag: Any = None) -> None:
        worker_thread = threading.Thread(
            target=self._work, args=(kind, tag, fn, args), name=f"curaq-{kind}", daemon=True
        )
        worker_thread.start()

    def _work(self, kind: str, tag: Any, fn: Callable[..., Any], args: tuple) -> None:
        try:
            result = fn(*args)
        except Exception as e:
            logger.debug(f"Background job '{kind}' failed: {e}")
            self.completions.put(Completion(kind, tag, error=e))
        else:
            self.completions.put(Completion(kind, tag, result=result))

    def drain(self) -> List[Completion]:
        done = []
        while True:
            try:
                done.append(self.completions.get_nowait())
            except queue.Empty:
                return done
