import asyncio
import json
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, List

from shopapi.errors import IOFailure
from shopapi.logging import get_logger

logger = get_logger(__name__)

# One lock per backing file, shared by every collection opened on that path.
_LOCKS: Dict[str, asyncio.Lock] = {}


def _get_lock(key: str) -> asyncio.Lock:
    if key not in _LOCKS:
        _LOCKS[key] = asyncio.Lock()
    return _LOCKS[key]


class JsonCollection:
    """A JSON array stored in a single file.

    The whole array is read on every load and rewritten on every save.
    Callers that mutate must hold `lock` from load to save.
    """

    def __init__(self, path: Path, timeout: float = 5.0):
        self.path = Path(path)
        self.timeout = timeout
        self.lock = _get_lock(str(self.path.resolve()))
        self._ensure()

    def _ensure(self) -> None:
        if self.path.exists():
            return
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self._write([])
        except OSError as e:
            logger.error("Could not create %s: %s", self.path, e)
            raise IOFailure(f"Could not create data file {self.path.name}") from e
        logger.info("Created empty data file %s", self.path)

    def _read(self) -> List[Dict[str, Any]]:
        try:
            content = self.path.read_text(encoding="utf-8")
        except OSError as e:
            logger.error("Error reading %s: %s", self.path, e)
            raise IOFailure(f"Could not read data file {self.path.name}") from e

        if not content.strip():
            return []
        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            logger.error("Invalid JSON in %s: %s", self.path, e)
            raise IOFailure(f"Data file {self.path.name} is not valid JSON") from e
        if not isinstance(data, list):
            raise IOFailure(f"Data file {self.path.name} does not contain a JSON array")
        return data

    def _write(self, items: List[Dict[str, Any]]) -> None:
        fd, temp_file = tempfile.mkstemp(dir=self.path.parent, prefix=self.path.name + ".", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(items, f, indent=2, ensure_ascii=False, allow_nan=False)
            os.replace(temp_file, self.path)
        except BaseException:
            if os.path.exists(temp_file):
                os.remove(temp_file)
            raise

    async def _read_with_timeout(self):
        try:
            return await asyncio.wait_for(asyncio.to_thread(self._read), self.timeout)
        except asyncio.TimeoutError as e:
            logger.error("Reading %s timed out after %.1fs", self.path, self.timeout)
            raise IOFailure(f"Timed out accessing data file {self.path.name}") from e

    async def load(self) -> List[Dict[str, Any]]:
        items = await self._read_with_timeout()
        logger.debug("Loaded %d records from %s", len(items), self.path)
        return items

    async def save(self, items: List[Dict[str, Any]]) -> None:
        """Write the whole array. The timeout applies to reads only; a started
        write runs to completion even if the calling task is cancelled."""
        write = asyncio.ensure_future(asyncio.to_thread(self._write, items))
        try:
            await asyncio.shield(write)
        except asyncio.CancelledError:
            await write
            raise
        except (OSError, ValueError) as e:
            logger.error("Error writing %s: %s", self.path, e)
            raise IOFailure(f"Could not write data file {self.path.name}") from e
