"""宠物自主走动计时器：随机间隔后换到另一个房间，与界面无关。

随机数和计时都通过接口注入：默认用 random.Random 和 Qt 单次定时器，
测试里可换成固定序列和手动时钟。
"""
import math
import random
import sys
from typing import Callable, Optional, Protocol, Sequence, TypeVar

from PyQt6.QtCore import QObject, QTimer

from pet_house.config import PET_MOVE_MAX_MS, PET_MOVE_MIN_MS, START_ROOM
from pet_house.game.models import RoomName

T = TypeVar("T")

StopFn = Callable[[], None]


class RandomSource(Protocol):
    """random.Random 的子集。"""

    def randint(self, a: int, b: int) -> int: ...

    def choice(self, seq: Sequence[T]) -> T: ...


class Clock(Protocol):
    """延时回调：call_later 返回取消函数。"""

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> StopFn: ...


class QtClock:
    """用单次 QTimer 实现延时；需要运行中的 Qt 事件循环。定时器挂在 owner 下，由 Qt 回收。"""

    def __init__(self, owner: Optional[QObject] = None):
        self._owner = owner or QObject()

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> StopFn:
        timer = QTimer(self._owner)
        timer.setSingleShot(True)
        done = {"value": False}

        def fire() -> None:
            if done["value"]:
                return
            done["value"] = True
            timer.deleteLater()
            callback()

        def cancel() -> None:
            if done["value"]:
                return
            done["value"] = True
            timer.stop()
            timer.deleteLater()

        timer.timeout.connect(fire)
        timer.start(delay_ms)
        return cancel


def clamp_delay_bounds(min_ms: float, max_ms: float) -> tuple[int, int]:
    """下限取整并不小于 0，上限取整并不小于下限。"""
    low = max(0, math.floor(min_ms))
    high = max(low, math.floor(max_ms))
    return low, high


def get_random_delay_ms(min_ms: float, max_ms: float, rng: Optional[RandomSource] = None) -> int:
    """在 [min_ms, max_ms] 闭区间内取随机整数毫秒（边界先按 clamp_delay_bounds 修正）。"""
    rng = rng or random
    low, high = clamp_delay_bounds(min_ms, max_ms)
    return rng.randint(low, high)


def select_next_room(current: RoomName | str, rng: Optional[RandomSource] = None) -> RoomName:
    """从当前房间以外的房间里等概率选一个。"""
    rng = rng or random
    candidates = [r for r in RoomName if r != current]
    return rng.choice(candidates)


class PetMovementTimer:
    """宠物走动循环：每一跳随机等待后调用 on_move(next_room)，然后以新房间为起点安排下一跳。"""

    def __init__(
        self,
        clock: Optional[Clock] = None,
        rng: Optional[RandomSource] = None,
        min_ms: int = PET_MOVE_MIN_MS,
        max_ms: int = PET_MOVE_MAX_MS,
        start_room: RoomName | str = START_ROOM,
    ):
        self.clock = clock or QtClock()
        self.rng = rng or random.Random()
        self.min_ms, self.max_ms = clamp_delay_bounds(min_ms, max_ms)
        self.start_room = RoomName(start_room)

    def start_pet_movement(self, on_move: Callable[[RoomName], None]) -> StopFn:
        """开始走动，返回停止函数（可重复调用）。每次 start 只管理自己那一跳。"""
        run = {"stopped": False, "cancel": None}

        def schedule(current: RoomName) -> None:
            delay = get_random_delay_ms(self.min_ms, self.max_ms, self.rng)
            run["cancel"] = self.clock.call_later(delay, lambda: hop(current))

        def hop(current: RoomName) -> None:
            run["cancel"] = None
            # 已取消的定时器即便到点也不再触发
            if run["stopped"]:
                return
            nxt = select_next_room(current, self.rng)
            on_move(nxt)
            if not run["stopped"]:
                schedule(nxt)

        def stop() -> None:
            if run["stopped"]:
                return
            run["stopped"] = True
            cancel = run["cancel"]
            run["cancel"] = None
            if cancel is not None:
                cancel()
            print("[小屋-计时] 宠物走动已停止", file=sys.stderr, flush=True)

        schedule(self.start_room)
        return stop
