"""宠物小屋全局配置与路径。"""
import os
from pathlib import Path

# 项目根目录（pet_house 包所在目录的上一级）
ROOT_DIR = Path(__file__).resolve().parent.parent
# 数据目录：存档等
DATA_DIR = ROOT_DIR / "data"
SAVES_DIR = DATA_DIR / "saves"

# 存档键：结构变化时升级版本号，并把旧键加入 LEGACY_STORAGE_KEYS
STORAGE_KEY = "tamagotchi-poc-state-v2"
LEGACY_STORAGE_KEYS = ("tamagotchi-poc-state",)

# 宠物自主走动间隔（毫秒，闭区间）
PET_MOVE_MIN_MS = 15000
PET_MOVE_MAX_MS = 30000
START_ROOM = "Living Room"

# 房间默认背景；没有装修的房间用空白占位图
DEFAULT_BACKGROUNDS = {
    "Living Room": "/assets/living-room.jpg",
    "Kitchen": "/assets/empty.png",
    "Bedroom": "/assets/empty.png",
}

# 房间背景生成（OpenAI 图像接口）
OPENAI_API_BASE = os.environ.get("OPENAI_API_BASE", "https://api.openai.com/v1").rstrip("/")
IMAGE_REQUEST_TIMEOUT = 120


def ensure_dirs() -> None:
    """确保数据目录存在。"""
    for d in (DATA_DIR, SAVES_DIR):
        d.mkdir(parents=True, exist_ok=True)
