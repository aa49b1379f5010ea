"""小屋游戏状态数据模型（可序列化，存档即此结构）。"""
import sys
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator
from pydantic.alias_generators import to_camel

from pet_house.config import DEFAULT_BACKGROUNDS, START_ROOM


class RoomName(str, Enum):
    """房间：固定三间，不支持动态增加。"""
    LIVING_ROOM = "Living Room"
    KITCHEN = "Kitchen"
    BEDROOM = "Bedroom"


class HideAndSeekObject(str, Enum):
    """捉迷藏可点击的藏身物件。"""
    COUCH = "Couch"
    LAMP = "Lamp"
    RUG = "Rug"


class MinigameStatus(str, Enum):
    """捉迷藏进度。"""
    IDLE = "idle"         # 刚开局，等待开始
    PLAYING = "playing"   # 正在找
    FOUND = "found"       # 找到了


ROOM_NAMES = tuple(r.value for r in RoomName)

# 存档字段为 camelCase（currentRoom / backgroundImage ...），属性名为 snake_case
_STATE_CONFIG = ConfigDict(
    use_enum_values=True,
    frozen=True,
    alias_generator=to_camel,
    populate_by_name=True,
)


def room_key(room: RoomName | str) -> str:
    """房间名统一为字符串键（house.rooms 的键）。"""
    return RoomName(room).value


class RoomState(BaseModel):
    """单个房间；background_image 为 URL 或 data URI。"""
    background_image: str = Field(..., description="房间背景图 URL 或 data URI")

    model_config = _STATE_CONFIG


class HouseState(BaseModel):
    """房子：每个房间一条记录，始终齐全。"""
    rooms: Dict[str, RoomState] = Field(..., description="房间名 -> 房间状态")

    model_config = _STATE_CONFIG

    @model_validator(mode="after")
    def _check_rooms(self) -> "HouseState":
        if set(self.rooms) != set(ROOM_NAMES):
            raise ValueError(f"house.rooms 必须恰好包含 {list(ROOM_NAMES)}，得到 {sorted(self.rooms)}")
        return self


class PetState(BaseModel):
    """宠物所在房间。"""
    current_room: RoomName = Field(..., description="宠物当前所在房间")

    model_config = _STATE_CONFIG


class PlayerState(BaseModel):
    """玩家当前查看的房间。"""
    current_view: RoomName = Field(..., description="玩家正在看的房间")

    model_config = _STATE_CONFIG


class HideAndSeekState(BaseModel):
    """一局捉迷藏；hiding_spot 在整局内不变。字段全部必填，没有隐式默认值。"""
    hiding_spot: HideAndSeekObject = Field(..., description="宠物藏在哪个物件后面")
    status: MinigameStatus = Field(..., description="当前进度")
    message: str = Field(..., description="给玩家看的提示语")

    model_config = _STATE_CONFIG


class GameState(BaseModel):
    """根状态。minigame 为 None 表示没有进行中的捉迷藏。"""
    pet: PetState
    player: PlayerState
    house: HouseState
    minigame: Optional[HideAndSeekState] = None

    model_config = _STATE_CONFIG

    def background_of(self, room: RoomName | str) -> str:
        return self.house.rooms[room_key(room)].background_image

    def to_document(self) -> Dict[str, Any]:
        """存档用的 JSON 兼容字典。"""
        return self.model_dump(mode="json", by_alias=True)


def default_rooms() -> Dict[str, RoomState]:
    return {name: RoomState(background_image=DEFAULT_BACKGROUNDS[name]) for name in ROOM_NAMES}


def initial_game_state() -> GameState:
    """启动时的默认状态：固定值，不读取任何外部数据。"""
    return GameState(
        pet=PetState(current_room=START_ROOM),
        player=PlayerState(current_view=START_ROOM),
        house=HouseState(rooms=default_rooms()),
        minigame=None,
    )


def _room_entry_usable(entry: Any) -> bool:
    if isinstance(entry, RoomState):
        return True
    return isinstance(entry, dict) and isinstance(
        entry.get("backgroundImage", entry.get("background_image")), str
    )


def normalize_loaded(raw: Any) -> Optional[GameState]:
    """
    把读到的存档整理成 GameState。
    缺少 pet / player / house 任一部分视为无存档，返回 None；
    缺失或损坏的单个房间用默认背景补齐，其余房间原样保留。
    """
    if not isinstance(raw, dict) or not all(k in raw for k in ("pet", "player", "house")):
        return None
    house = raw.get("house")
    rooms = house.get("rooms") if isinstance(house, dict) else None
    if not isinstance(rooms, dict):
        rooms = {}
    filled: Dict[str, Any] = {}
    for name in ROOM_NAMES:
        entry = rooms.get(name)
        if _room_entry_usable(entry):
            filled[name] = entry
        else:
            filled[name] = {"backgroundImage": DEFAULT_BACKGROUNDS[name]}
    data = {**raw, "house": {"rooms": filled}}
    try:
        return GameState.model_validate(data)
    except ValidationError as e:
        print(f"[小屋-存档] 存档结构不兼容，忽略: {e.error_count()} 处错误", file=sys.stderr, flush=True)
        return None
