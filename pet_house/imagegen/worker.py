"""房间背景生成后台 Worker（QThread），避免阻塞界面。"""
from typing import Optional

from PyQt6.QtCore import QThread, pyqtSignal

from pet_house.imagegen.client import RoomImageService


class RoomImageWorker(QThread):
    """在后台线程调用 RoomImageService，结果通过信号回到主线程。"""
    finished_success = pyqtSignal(str, str)  # 房间名, 背景 data URI
    finished_fail = pyqtSignal(str, str)     # 房间名, 错误信息

    def __init__(
        self,
        service: RoomImageService,
        room: str,
        prompt: str,
        source_image: Optional[str] = None,
        mask: Optional[str] = None,
        strength: Optional[float] = None,
        seed: Optional[int] = None,
    ):
        super().__init__()
        self._service = service
        self._room = room
        self._prompt = prompt
        self._options = {"source_image": source_image, "mask": mask, "strength": strength, "seed": seed}

    def run(self) -> None:
        try:
            image = self._service.generate_room_image(self._prompt, self._room, **self._options)
        except Exception as e:
            self.finished_fail.emit(self._room, str(e) or "生成失败")
            return
        self.finished_success.emit(self._room, image)
