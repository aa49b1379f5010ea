"""游戏动作：界面和计时器通过 dispatch 提交，一律交给 reducer 处理。"""
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter
from pydantic.alias_generators import to_camel

from pet_house.game.models import HideAndSeekObject, RoomName

# 与存档一致：界面层传 camelCase（backgroundImage），也接受 snake_case
_ACTION_CONFIG = ConfigDict(
    use_enum_values=True,
    frozen=True,
    alias_generator=to_camel,
    populate_by_name=True,
)


class Navigate(BaseModel):
    """玩家切换查看的房间。"""
    type: Literal["NAVIGATE"] = "NAVIGATE"
    room: RoomName

    model_config = _ACTION_CONFIG


class PetMoved(BaseModel):
    """宠物自己走到另一个房间（只由走动计时器产生）。"""
    type: Literal["PET_MOVED"] = "PET_MOVED"
    room: RoomName

    model_config = _ACTION_CONFIG


class Feed(BaseModel):
    type: Literal["FEED"] = "FEED"

    model_config = _ACTION_CONFIG


class PlayWithPet(BaseModel):
    type: Literal["PLAY_WITH_PET"] = "PLAY_WITH_PET"

    model_config = _ACTION_CONFIG


class StartMinigame(BaseModel):
    type: Literal["START_MINIGAME"] = "START_MINIGAME"

    model_config = _ACTION_CONFIG


class GuessHidingSpot(BaseModel):
    """猜宠物藏在哪。"""
    type: Literal["GUESS_HIDING_SPOT"] = "GUESS_HIDING_SPOT"
    guess: HideAndSeekObject

    model_config = _ACTION_CONFIG


class EndMinigame(BaseModel):
    type: Literal["END_MINIGAME"] = "END_MINIGAME"

    model_config = _ACTION_CONFIG


class UpdateRoomLook(BaseModel):
    """替换某个房间的背景图（生成成功后提交）。"""
    type: Literal["UPDATE_ROOM_LOOK"] = "UPDATE_ROOM_LOOK"
    room: RoomName
    background_image: str = Field(..., min_length=1, description="URL 或 data URI")

    model_config = _ACTION_CONFIG


GameAction = Annotated[
    Union[
        Navigate,
        PetMoved,
        Feed,
        PlayWithPet,
        StartMinigame,
        GuessHidingSpot,
        EndMinigame,
        UpdateRoomLook,
    ],
    Field(discriminator="type"),
]

_action_adapter = TypeAdapter(GameAction)


def parse_action(data: dict[str, Any]) -> BaseModel:
    """把界面层传来的字典（如 {"type": "NAVIGATE", "room": "Kitchen"}）校验为动作对象。

    格式不对时抛出 pydantic.ValidationError。
    """
    return _action_adapter.validate_python(data)
