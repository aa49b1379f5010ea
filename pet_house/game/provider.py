"""游戏会话：持有唯一的 GameState，负责读档、每次变化后存档、启动/停止宠物走动。

界面只读 state，所有修改都通过 dispatch 交给 reducer。
"""
import sys
from typing import Any, Optional

from PyQt6.QtCore import QObject, QTimer, pyqtSignal

from pet_house.game.actions import Feed, PetMoved, UpdateRoomLook
from pet_house.game.events import FEED_EVENT, ROOM_IMAGE_FAILED_EVENT, GameEvents
from pet_house.game.models import GameState, RoomName, initial_game_state, room_key
from pet_house.game.reducer import can_feed, game_reducer
from pet_house.game.scheduler import PetMovementTimer, StopFn
from pet_house.game.storage import GameStorage
from pet_house.imagegen.client import RoomImageService
from pet_house.imagegen.worker import RoomImageWorker


class GameProvider(QObject):
    """一次会话的状态容器。由调用方创建、start()、stop()，不使用全局单例。"""
    stateChanged = pyqtSignal(object)  # 新的 GameState

    def __init__(
        self,
        storage: Optional[GameStorage] = None,
        timer: Optional[PetMovementTimer] = None,
        events: Optional[GameEvents] = None,
        image_service: Optional[RoomImageService] = None,
        parent: Optional[QObject] = None,
    ):
        super().__init__(parent)
        # 先用固定默认值，保证每次启动的首帧一致；存档在 start 后异步读入
        self._state: GameState = initial_game_state()
        self._storage = storage or GameStorage()
        self._timer = timer or PetMovementTimer()
        self.events = events or GameEvents(self)
        self._image_service = image_service
        self._stop_movement: Optional[StopFn] = None
        self._started = False
        self._stopped = False
        self._hydrated = False
        self._workers: set[RoomImageWorker] = set()

    @property
    def state(self) -> GameState:
        return self._state

    def dispatch(self, action: Any) -> GameState:
        """按顺序应用动作；状态有变化才存档并发出 stateChanged。"""
        prev = self._state
        nxt = game_reducer(prev, action)
        if nxt is prev:
            return prev
        self._commit(nxt)
        return nxt

    def _commit(self, state: GameState) -> None:
        self._state = state
        self._storage.save(state)
        self.stateChanged.emit(state)

    def hydrate(self) -> bool:
        """读档（每个会话只做一次，stop 之后不再读）。读到有效存档则整体替换当前状态。"""
        if self._hydrated or self._stopped:
            return False
        self._hydrated = True
        loaded = self._storage.load()
        if loaded is None:
            return False
        print("[小屋] 已读取存档", file=sys.stderr, flush=True)
        self._commit(loaded)
        return True

    def start(self) -> None:
        """开始会话：清理旧存档键、下一轮事件循环读档、启动宠物走动。重复调用无效。"""
        if self._started:
            return
        self._started = True
        # 无论读档结果如何都清理旧键
        self._storage.remove_legacy_keys()
        QTimer.singleShot(0, self.hydrate)
        self._stop_movement = self._timer.start_pet_movement(self._on_pet_move)

    def stop(self) -> None:
        """结束会话：停止走动计时器，等待进行中的生成任务结束。可重复调用。"""
        if self._stopped:
            return
        self._stopped = True
        if self._stop_movement is not None:
            self._stop_movement()
            self._stop_movement = None
        for worker in list(self._workers):
            worker.wait()
        self._workers.clear()

    def _on_pet_move(self, room: RoomName) -> None:
        if self._stopped:
            return
        self.dispatch(PetMoved(room=room))

    def feed(self) -> bool:
        """喂食：守卫满足时发布 feed 事件触发动画，状态本身不变。"""
        eligible = can_feed(self._state)
        self.dispatch(Feed())
        if eligible:
            self.events.publish(FEED_EVENT)
        return eligible

    def regenerate_room(
        self,
        room: RoomName | str,
        prompt: str,
        source_image: Optional[str] = None,
        mask: Optional[str] = None,
        strength: Optional[float] = None,
        seed: Optional[int] = None,
    ) -> Optional[RoomImageWorker]:
        """后台生成新背景；成功替换该房间背景，失败发布 room_image_failed，状态不变。

        会话已 stop 时不再启动任务，返回 None。
        """
        if self._stopped:
            return None
        if self._image_service is None:
            self._image_service = RoomImageService()
        worker = RoomImageWorker(
            self._image_service,
            room_key(room),
            prompt,
            source_image=source_image,
            mask=mask,
            strength=strength,
            seed=seed,
        )
        worker.finished_success.connect(self.apply_room_image)
        worker.finished_fail.connect(self.report_room_image_error)
        worker.finished.connect(lambda: self._workers.discard(worker))
        self._workers.add(worker)
        worker.start()
        return worker

    def apply_room_image(self, room: str, image: str) -> None:
        if self._stopped:
            return
        self.dispatch(UpdateRoomLook(room=room, background_image=image))

    def report_room_image_error(self, room: str, error: str) -> None:
        print(f"[小屋-生成] {room} 背景生成失败: {error}", file=sys.stderr, flush=True)
        self.events.publish(ROOM_IMAGE_FAILED_EVENT, {"room": room, "error": error})
