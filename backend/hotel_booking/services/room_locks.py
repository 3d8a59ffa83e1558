"""
房间级互斥锁
预订的 读取-校验-写入 必须在同一房间锁内完成，避免并发超订
"""
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Dict, Iterator
import logging
import threading

logger = logging.getLogger(__name__)


@dataclass
class _RoomLock:
    lock: threading.Lock = field(default_factory=threading.Lock)
    # 持有者 + 等待者数量，归零时从锁表移除
    users: int = 0


class RoomLockRegistry:
    """
    按 room_id 分配的锁表（线程安全）

    只有正在被持有或等待的房间才占用条目，空闲即回收。
    每个应用实例持有一份，跨进程部署时还需依赖数据库隔离级别。
    """

    def __init__(self):
        self._locks: Dict[int, _RoomLock] = {}
        self._registry_lock = threading.Lock()

    def _acquire_entry(self, room_id: int) -> _RoomLock:
        with self._registry_lock:
            entry = self._locks.get(room_id)
            if entry is None:
                entry = _RoomLock()
                self._locks[room_id] = entry
            entry.users += 1
            return entry

    def _release_entry(self, room_id: int, entry: _RoomLock) -> None:
        with self._registry_lock:
            entry.users -= 1
            if entry.users == 0:
                del self._locks[room_id]

    @contextmanager
    def hold(self, room_id: int) -> Iterator[None]:
        entry = self._acquire_entry(room_id)
        try:
            if not entry.lock.acquire(blocking=False):
                logger.debug(f"Waiting for room {room_id} lock")
                entry.lock.acquire()
            try:
                yield
            finally:
                entry.lock.release()
        finally:
            self._release_entry(room_id, entry)

    def __len__(self) -> int:
        with self._registry_lock:
            return len(self._locks)
