"""Tk front end: lookups run on a worker thread, the Tk loop polls for results."""

import logging
import tkinter as tk

from weather_app.config import settings
from weather_app.logging_config import setup_logging
from weather_app.services.background import BackgroundResolver, Resolution, WeatherPresenter
from weather_app.services.mailbox import Mailbox
from weather_app.services.pipeline import build_pipeline

logger = logging.getLogger(__name__)

# the desktop surface only shows temperature
DESKTOP_CURRENT_FIELDS = ("temperature_2m",)


class WeatherWindow:
    def __init__(self, root: tk.Tk, resolver: BackgroundResolver, presenter: WeatherPresenter):
        self.root = root
        self.resolver = resolver
        self.presenter = presenter
        self.presenter.redraw = self._redraw

        root.title("Weather App")
        self.city = tk.StringVar()
        self.result = tk.StringVar()

        entry = tk.Entry(root, textvariable=self.city, width=32)
        entry.pack(padx=12, pady=(12, 6))
        entry.bind("<Return>", lambda _event: self.fetch())
        tk.Button(root, text="Fetch Weather", command=self.fetch).pack(pady=6)
        tk.Label(root, textvariable=self.result, wraplength=320).pack(padx=12, pady=(6, 12))

    def fetch(self) -> None:
        city = self.city.get()
        logger.debug("Lookup requested for %r", city)
        self.resolver.submit(city)

    def _redraw(self, text: str) -> None:
        self.result.set(text)

    def tick(self) -> None:
        self.presenter.poll()
        self.root.after(settings.poll_interval_ms, self.tick)


def main() -> None:
    setup_logging()
    mailbox: Mailbox[Resolution] = Mailbox()
    resolver = BackgroundResolver(build_pipeline(settings, current_fields=DESKTOP_CURRENT_FIELDS), mailbox)
    resolver.start()

    root = tk.Tk()
    window = WeatherWindow(root, resolver, WeatherPresenter(mailbox))
    window.tick()
    try:
        root.mainloop()
    finally:
        resolver.stop()


if __name__ == "__main__":
    main()
