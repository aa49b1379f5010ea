"""房间背景生成。"""
from pet_house.imagegen.client import ImageGenerationError, RoomImageService
from pet_house.imagegen.prompt import compose_room_prompt
from pet_house.imagegen.worker import RoomImageWorker

__all__ = [
    "ImageGenerationError",
    "RoomImageService",
    "RoomImageWorker",
    "compose_room_prompt",
]
