import asyncio
import concurrent.futures
import logging
import threading
from dataclasses import dataclass
from typing import Callable, Optional

from weather_app.models import ResolutionOutcome
from weather_app.services.mailbox import Mailbox
from weather_app.services.pipeline import WeatherPipeline, display_text

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Resolution:
    city: str
    outcome: ResolutionOutcome


class BackgroundResolver:
    """Runs pipeline lookups on a private event loop thread.

    Each finished run is handed to ``mailbox``; runs are never cancelled and
    the most recently completed one is what the reader sees next.
    """

    def __init__(self, pipeline: WeatherPipeline, mailbox: Mailbox[Resolution]):
        self.pipeline = pipeline
        self.mailbox = mailbox
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._thread: Optional[threading.Thread] = None

    def start(self) -> None:
        if self._loop is not None:
            return
        self._loop = asyncio.new_event_loop()
        self._thread = threading.Thread(target=self._loop.run_forever, name="weather-worker", daemon=True)
        self._thread.start()

    def stop(self, timeout: float = 5.0) -> None:
        loop, thread = self._loop, self._thread
        if loop is None:
            return
        loop.call_soon_threadsafe(loop.stop)
        if thread is not None:
            thread.join(timeout)
        loop.close()
        self._loop = None
        self._thread = None

    def submit(self, city: str) -> "concurrent.futures.Future[ResolutionOutcome]":
        if self._loop is None or self._loop.is_closed():
            raise RuntimeError("BackgroundResolver is not running; call start() first")
        return asyncio.run_coroutine_threadsafe(self._resolve(city), self._loop)

    async def _resolve(self, city: str) -> ResolutionOutcome:
        outcome = await self.pipeline.run(city)
        logger.debug("Delivering %r for %r", outcome, city)
        self.mailbox.send(Resolution(city=city, outcome=outcome))
        return outcome


class WeatherPresenter:
    """Foreground side of the handoff: call ``poll`` once per UI iteration."""

    def __init__(self, mailbox: Mailbox[Resolution], redraw: Optional[Callable[[str], None]] = None):
        self.mailbox = mailbox
        self.redraw = redraw
        self.text = ""

    def poll(self) -> bool:
        resolution = self.mailbox.try_take()
        if resolution is None:
            return False
        self.text = display_text(resolution.city, resolution.outcome)
        if self.redraw is not None:
            self.redraw(self.text)
        return True
