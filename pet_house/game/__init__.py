"""游戏状态：模型、动作、reducer、走动计时、存档、事件与会话。"""
from pet_house.game.actions import (
    EndMinigame,
    Feed,
    GameAction,
    GuessHidingSpot,
    Navigate,
    PetMoved,
    PlayWithPet,
    StartMinigame,
    UpdateRoomLook,
    parse_action,
)
from pet_house.game.events import FEED_EVENT, ROOM_IMAGE_FAILED_EVENT, GameEvents
from pet_house.game.models import (
    GameState,
    HideAndSeekObject,
    HideAndSeekState,
    MinigameStatus,
    RoomName,
    initial_game_state,
    normalize_loaded,
)
from pet_house.game.provider import GameProvider
from pet_house.game.reducer import can_feed, can_play, game_reducer
from pet_house.game.scheduler import PetMovementTimer, QtClock, get_random_delay_ms, select_next_room
from pet_house.game.storage import GameStorage

__all__ = [
    "EndMinigame",
    "Feed",
    "GameAction",
    "GuessHidingSpot",
    "Navigate",
    "PetMoved",
    "PlayWithPet",
    "StartMinigame",
    "UpdateRoomLook",
    "parse_action",
    "FEED_EVENT",
    "ROOM_IMAGE_FAILED_EVENT",
    "GameEvents",
    "GameState",
    "HideAndSeekObject",
    "HideAndSeekState",
    "MinigameStatus",
    "RoomName",
    "initial_game_state",
    "normalize_loaded",
    "GameProvider",
    "can_feed",
    "can_play",
    "game_reducer",
    "PetMovementTimer",
    "QtClock",
    "get_random_delay_ms",
    "select_next_room",
    "GameStorage",
]
