"""游戏存档：本地 JSON 文件，一个存档键对应一个文件。

存档只是优化，不影响正确性：save / load / clear 出错时只打印日志，从不抛出。
"""
import json
import sys
from pathlib import Path
from typing import Iterable, Optional

from pet_house.config import LEGACY_STORAGE_KEYS, SAVES_DIR, STORAGE_KEY, ensure_dirs
from pet_house.game.models import GameState, normalize_loaded


class GameStorage:
    """按存档键读写整份 GameState。结构变化时换新键，旧键由 remove_legacy_keys 清掉。"""

    def __init__(
        self,
        storage_key: str = STORAGE_KEY,
        base_dir: Optional[Path] = None,
        legacy_keys: Iterable[str] = LEGACY_STORAGE_KEYS,
    ):
        self.storage_key = storage_key
        self.legacy_keys = tuple(k for k in legacy_keys if k != storage_key)
        if base_dir is None:
            ensure_dirs()
        self.base_dir = base_dir or SAVES_DIR

    def _path(self, key: Optional[str] = None) -> Path:
        return self.base_dir / f"{key or self.storage_key}.json"

    def save(self, state: GameState) -> None:
        """写入整份状态。"""
        try:
            data = json.dumps(state.to_document(), indent=2, ensure_ascii=False)
            self.base_dir.mkdir(parents=True, exist_ok=True)
            with open(self._path(), "w", encoding="utf-8") as f:
                f.write(data)
        except Exception as e:
            print(f"[小屋-存档] 保存失败: {e}", file=sys.stderr, flush=True)

    def load(self) -> Optional[GameState]:
        """读取存档；没有存档、JSON 损坏或结构不兼容都返回 None。"""
        path = self._path()
        try:
            if not path.exists():
                return None
            with open(path, "r", encoding="utf-8") as f:
                raw = json.load(f)
        except Exception as e:
            print(f"[小屋-存档] 读取失败: {e}", file=sys.stderr, flush=True)
            return None
        return normalize_loaded(raw)

    def clear(self) -> None:
        """删除当前存档。"""
        self._remove(self._path())

    def remove_legacy_keys(self) -> None:
        """删除旧版本存档键，避免读回不兼容的旧档。"""
        for key in self.legacy_keys:
            self._remove(self._path(key))

    def _remove(self, path: Path) -> None:
        try:
            path.unlink(missing_ok=True)
        except Exception as e:
            print(f"[小屋-存档] 删除 {path.name} 失败: {e}", file=sys.stderr, flush=True)
