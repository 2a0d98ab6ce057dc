"""Writes the generated portfolio to the public and deploy directories."""

from __future__ import annotations

import asyncio
import json
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from portfolio_builder.models.document import to_jsonable

if TYPE_CHECKING:
    from collections.abc import Mapping
    from pathlib import Path

logger = logging.getLogger(__name__)

PORTFOLIO_FILENAME = "portfolio.html"
INDEX_FILENAME = "index.html"


@dataclass(frozen=True)
class GeneratedOutput:
    public_path: Path
    dist_path: Path
    data_path: Path


class OutputWriter:
    """Own the on-disk layout of generated output.

    ``public_dir`` is served by the app, ``dist_dir`` is what gets deployed,
    and ``data_file`` keeps the document the page was generated from.
    """

    def __init__(self, public_dir: Path, dist_dir: Path, data_file: Path) -> None:
        self.public_dir = public_dir
        self.dist_dir = dist_dir
        self.data_file = data_file

    @property
    def dist_portfolio(self) -> Path:
        return self.dist_dir / PORTFOLIO_FILENAME

    def has_output(self) -> bool:
        return self.dist_portfolio.is_file()

    async def write(self, html: str, document: Mapping[str, Any]) -> GeneratedOutput:
        """Write the page to both directories and the document next to them.

        Raises ``OSError`` if any file cannot be written.
        """
        output = GeneratedOutput(
            public_path=self.public_dir / PORTFOLIO_FILENAME,
            dist_path=self.dist_portfolio,
            data_path=self.data_file,
        )
        data = json.dumps(to_jsonable(document), indent=2, ensure_ascii=False)
        await asyncio.to_thread(self._write_all, output, html, data)
        logger.info(
            "Portfolio written - public=%s dist=%s data=%s",
            output.public_path,
            output.dist_path,
            output.data_path,
        )
        return output

    async def ensure_index(self, html: str) -> bool:
        """Write ``index.html`` into the deploy directory if it is missing.

        Returns True when a new index was written.
        """
        index = self.dist_dir / INDEX_FILENAME
        if index.exists():
            return False
        await asyncio.to_thread(self._write_text, index, html)
        logger.info("Placeholder index written - path=%s", index)
        return True

    def _write_all(self, output: GeneratedOutput, html: str, data: str) -> None:
        self._write_text(output.public_path, html)
        self._write_text(output.dist_path, html)
        self._write_text(output.data_path, data)

    @staticmethod
    def _write_text(path: Path, text: str) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
