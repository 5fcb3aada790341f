"""Appends search-grounded stock price snapshots to a JSON history file."""
from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Sequence

from app.tools.gemini_client import CompletionClient
from grounded_search.models import ResponseFormat

logger = logging.getLogger(__name__)

DEFAULT_STOCKS_MODEL = "gemini-2.5-flash-preview-04-17"
DEFAULT_STOCKS_TEMPERATURE = 1.0
DEFAULT_TICKERS = ("AAPL", "MSFT", "GOOGL")
DEFAULT_HISTORY_FILE = Path("response.json")


def build_stocks_prompt(tickers: Sequence[str]) -> str:
    example = ", ".join(f'"{ticker}": 100.00' for ticker in tickers)
    return (
        f"Provide the current stock prices in USD for {', '.join(tickers)} in JSON format. "
        "Return an object with ticker symbols as keys and prices as numbers. "
        f"Example: {{{example}}}"
    )


class StockSnapshotAgent:
    """Takes one price snapshot per ``run_once`` call; scheduling is up to the caller."""

    def __init__(
        self,
        client: CompletionClient,
        *,
        tickers: Sequence[str] = DEFAULT_TICKERS,
        model: str = DEFAULT_STOCKS_MODEL,
        temperature: float = DEFAULT_STOCKS_TEMPERATURE,
        history_path: Path = DEFAULT_HISTORY_FILE,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self.client = client
        self.tickers = tuple(tickers)
        self.model = model
        self.temperature = temperature
        self.history_path = Path(history_path)
        self.clock = clock or (lambda: datetime.now(timezone.utc))

    def run_once(self) -> Optional[Dict[str, Any]]:
        result = self.client.complete(
            self.model,
            self.temperature,
            build_stocks_prompt(self.tickers),
            ResponseFormat.JSON,
            True,
        )
        if not result.ok:
            logger.error("Falha ao obter preços das ações: %s", result.reason)
            return None

        try:
            prices = json.loads(result.value.text)
        except json.JSONDecodeError as exc:
            logger.error("Stock prices reply is not valid JSON: %s", exc)
            return None
        if not isinstance(prices, dict):
            logger.error("Stock prices reply is not a JSON object")
            return None

        entry = {"timestamp": self.clock().isoformat(), "stocks": prices}
        try:
            history = self._load_history()
        except (OSError, ValueError) as exc:
            logger.error("Cannot read stock history %s: %s", self.history_path, exc)
            return None
        history.append(entry)
        self.history_path.write_text(json.dumps(history, indent=2, ensure_ascii=False), encoding="utf-8")
        logger.info("Preços das ações salvos em %s às %s", self.history_path, entry["timestamp"])
        return entry

    def _load_history(self) -> List[Any]:
        if not self.history_path.exists():
            return []
        history = json.loads(self.history_path.read_text(encoding="utf-8"))
        if not isinstance(history, list):
            raise ValueError(f"{self.history_path} does not hold a JSON array")
        return history
