"""界面事件总线：只传一次性的表现效果（如喂食动画），不进入存档，也不经过 reducer。

发布是同步的；之后才订阅的监听者收不到之前发布过的事件（没有回放）。
"""
import sys
from typing import Any, Callable

from PyQt6.QtCore import QObject, pyqtSignal

FEED_EVENT = "feed"
ROOM_IMAGE_FAILED_EVENT = "room_image_failed"


class GameEvents(QObject):
    """按事件名订阅的发布/订阅通道。"""
    published = pyqtSignal(str, object)  # 事件名, 附带数据

    def publish(self, name: str, payload: Any = None) -> None:
        self.published.emit(name, payload)

    def subscribe(self, name: str, handler: Callable[[Any], None]) -> Callable[[], None]:
        """订阅某个事件，返回取消订阅函数。"""

        def on_published(event_name: str, payload: Any) -> None:
            if event_name != name:
                return
            try:
                handler(payload)
            except Exception as e:
                # 一个监听者出错不影响其他监听者
                print(f"[小屋-事件] 处理 {name} 出错: {e}", file=sys.stderr, flush=True)

        self.published.connect(on_published)

        def unsubscribe() -> None:
            try:
                self.published.disconnect(on_published)
            except TypeError:
                pass

        return unsubscribe
