"""HTTP signal source: fetch provider text, score it, extract a ticker."""

import asyncio
import json
import re
from contextlib import asynccontextmanager
from typing import Optional

import aiohttp

from ..config.defaults import SignalParams
from ..models.strike import Signal
from .base import BaseSignalSource
from .sentiment import analyze

USER_AGENT = "governor-app/204.7"


class HttpSignalSource(BaseSignalSource):
    """Query each configured provider independently with a short timeout."""

    def __init__(self, params: Optional[SignalParams] = None, name: str = "http"):
        super().__init__(name)
        self.params = params or SignalParams()
        self.ticker_re = re.compile(self.params.ticker_pattern)

    @asynccontextmanager
    async def _session(self):
        timeout = aiohttp.ClientTimeout(total=self.params.timeout_seconds)
        async with aiohttp.ClientSession(
            timeout=timeout,
            headers={"User-Agent": USER_AGENT},
        ) as session:
            yield session

    async def collect(self) -> list[Signal]:
        if not self.params.providers:
            return []

        async with self._session() as session:
            results = await asyncio.gather(
                *(self._collect_one(session, url) for url in self.params.providers),
                return_exceptions=True
            )

        signals = []
        for url, result in zip(self.params.providers, results):
            if isinstance(result, BaseException):
                self.logger.debug("Provider skipped", url=url, error=repr(result))
            elif result is not None:
                signals.append(result)
        return signals

    async def _collect_one(self, session: aiohttp.ClientSession, url: str) -> Optional[Signal]:
        text = await self.fetch_text(session, url)
        return self.extract_signal(text)

    async def fetch_text(self, session: aiohttp.ClientSession, url: str) -> str:
        """Fetch a provider body as text; JSON bodies are re-serialized."""
        async with session.get(url) as response:
            response.raise_for_status()
            body = await response.text(errors="replace")

        if "json" in (response.content_type or ""):
            try:
                return json.dumps(json.loads(body))
            except ValueError:
                return body
        return body

    def extract_signal(self, text: str) -> Optional[Signal]:
        """
        Turn one text body into at most one signal.

        The first ``$TICKER`` token wins; the body's comparative sentiment
        must exceed the strength threshold.
        """
        match = self.ticker_re.search(text)
        if match is None:
            return None

        sentiment = analyze(text)
        if sentiment.comparative <= self.params.strength_threshold:
            return None

        return Signal(ticker=match.group(0).lstrip("$"), strength=sentiment.comparative)
