"""Concurrency-safe persistence for encounters."""

from __future__ import annotations

import asyncio
import json
import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator, Callable, Dict, Optional, TypeVar

from .encounter import Encounter

log = logging.getLogger(__name__)

T = TypeVar("T")

StorageSerial = tuple[int, int]
Buckets = Dict[str, Dict[str, Dict[str, object]]]


class EncounterRepository:
    """Store one encounter per guild channel, backed by a JSON file.

    Every read and write happens inside :meth:`_transaction`, which holds a
    single :class:`asyncio.Lock` and reloads the file when it changed on disk.
    That lock also serialises alias allocation: :meth:`update` loads the
    encounter, applies the change and persists it before anyone else may look.
    """

    def __init__(self, storage_path: Path) -> None:
        self._storage_path = storage_path
        self._lock = asyncio.Lock()
        self._buckets: Buckets = {}
        self._storage_serial: Optional[StorageSerial] = None
        self._fresh = False

    def _serial_on_disk(self) -> Optional[StorageSerial]:
        try:
            stat_result = self._storage_path.stat()
        except FileNotFoundError:
            return None
        return (stat_result.st_mtime_ns, stat_result.st_size)

    def _read_buckets(self) -> Buckets:
        try:
            text = self._storage_path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        if not text.strip():
            return {}
        try:
            raw = json.loads(text)
        except json.JSONDecodeError:
            log.warning("Ignoring unreadable encounter storage at %s", self._storage_path)
            return {}
        if not isinstance(raw, dict):
            log.warning("Ignoring encounter storage at %s: expected an object", self._storage_path)
            return {}
        return {
            str(guild_id): {str(channel_id): dict(record) for channel_id, record in bucket.items()}
            for guild_id, bucket in raw.items()
            if isinstance(bucket, dict)
        }

    def _write_buckets(self) -> Optional[StorageSerial]:
        self._storage_path.parent.mkdir(parents=True, exist_ok=True)
        self._storage_path.write_text(json.dumps(self._buckets, indent=2, sort_keys=True), encoding="utf-8")
        return self._serial_on_disk()

    @asynccontextmanager
    async def _transaction(self) -> AsyncIterator[Buckets]:
        async with self._lock:
            serial = await asyncio.to_thread(self._serial_on_disk)
            if not self._fresh or serial != self._storage_serial:
                self._buckets = await asyncio.to_thread(self._read_buckets) if serial else {}
                self._storage_serial = serial
                self._fresh = True
            yield self._buckets

    async def _commit(self) -> None:
        self._storage_serial = await asyncio.to_thread(self._write_buckets)

    def _lookup(self, guild_id: int, channel_id: int) -> Optional[Encounter]:
        record = self._buckets.get(str(guild_id), {}).get(str(channel_id))
        return Encounter.from_dict(record) if record else None

    async def get(self, guild_id: int, channel_id: int) -> Optional[Encounter]:
        async with self._transaction():
            return self._lookup(guild_id, channel_id)

    async def save(self, encounter: Encounter) -> None:
        async with self._transaction() as buckets:
            buckets.setdefault(str(encounter.guild_id), {})[str(encounter.channel_id)] = encounter.to_dict()
            await self._commit()

    async def clear(self, guild_id: int, channel_id: int) -> bool:
        async with self._transaction() as buckets:
            bucket = buckets.get(str(guild_id))
            if not bucket or bucket.pop(str(channel_id), None) is None:
                return False
            if not bucket:
                del buckets[str(guild_id)]
            await self._commit()
            return True

    async def update(
        self, guild_id: int, channel_id: int, mutator: Callable[[Encounter], T]
    ) -> Optional[T]:
        """Apply ``mutator`` to the stored encounter and persist the result.

        Returns ``None`` when there is no encounter. The mutator runs while the
        lock is held and must therefore be synchronous; if it raises, nothing
        is written.
        """

        async with self._transaction() as buckets:
            encounter = self._lookup(guild_id, channel_id)
            if encounter is None:
                return None
            result = mutator(encounter)
            buckets.setdefault(str(guild_id), {})[str(channel_id)] = encounter.to_dict()
            await self._commit()
            return result
