"""纯函数 reducer：(state, action) -> state，所有游戏规则都在这里。

不做 I/O、不用随机数、不修改入参；守卫条件不满足时原样返回同一个 state。
"""
from typing import Any

from pet_house.game.actions import (
    EndMinigame,
    Feed,
    GuessHidingSpot,
    Navigate,
    PetMoved,
    PlayWithPet,
    StartMinigame,
    UpdateRoomLook,
)
from pet_house.game.models import (
    GameState,
    HideAndSeekObject,
    HideAndSeekState,
    HouseState,
    MinigameStatus,
    PetState,
    PlayerState,
    RoomName,
    RoomState,
    room_key,
)

START_MESSAGE = "Where did I hide?"
FOUND_MESSAGE = "You found me!"
MISS_MESSAGE = "Try again!"


def can_feed(state: GameState) -> bool:
    """玩家和宠物都在厨房才能喂。"""
    return state.player.current_view == RoomName.KITCHEN and state.pet.current_room == RoomName.KITCHEN


def can_play(state: GameState) -> bool:
    """玩家和宠物都在客厅才能玩捉迷藏。"""
    return (
        state.player.current_view == RoomName.LIVING_ROOM
        and state.pet.current_room == RoomName.LIVING_ROOM
    )


def game_reducer(state: GameState, action: Any) -> GameState:
    if isinstance(action, Navigate):
        return state.model_copy(update={"player": PlayerState(current_view=action.room)})

    if isinstance(action, PetMoved):
        return state.model_copy(update={"pet": PetState(current_room=action.room)})

    if isinstance(action, Feed):
        # 喂食只是动画效果，由事件总线触发；这里只负责守卫
        return state

    if isinstance(action, PlayWithPet):
        if not can_play(state):
            return state
        minigame = HideAndSeekState(
            hiding_spot=HideAndSeekObject.COUCH,
            status=MinigameStatus.IDLE,
            message="",
        )
        return state.model_copy(update={"minigame": minigame})

    if isinstance(action, StartMinigame):
        if state.minigame is None:
            return state
        minigame = HideAndSeekState(
            hiding_spot=state.minigame.hiding_spot,
            status=MinigameStatus.PLAYING,
            message=START_MESSAGE,
        )
        return state.model_copy(update={"minigame": minigame})

    if isinstance(action, GuessHidingSpot):
        if state.minigame is None:
            return state
        found = action.guess == state.minigame.hiding_spot
        minigame = HideAndSeekState(
            hiding_spot=state.minigame.hiding_spot,
            status=MinigameStatus.FOUND if found else MinigameStatus.PLAYING,
            message=FOUND_MESSAGE if found else MISS_MESSAGE,
        )
        return state.model_copy(update={"minigame": minigame})

    if isinstance(action, EndMinigame):
        return state.model_copy(update={"minigame": None})

    if isinstance(action, UpdateRoomLook):
        rooms = dict(state.house.rooms)
        rooms[room_key(action.room)] = RoomState(background_image=action.background_image)
        return state.model_copy(update={"house": HouseState(rooms=rooms)})

    return state
