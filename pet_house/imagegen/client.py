"""房间背景图生成：调用 OpenAI 图像接口，返回可直接作为背景的 data URI。

无参考图时走文生图（dall-e-3）；传入 data URI 参考图时走图像编辑（gpt-image-1），
蒙版同为 data URI 时一并上传（白色可改、黑色保留）。
"""
import base64
import os
import sys
from typing import Optional

import requests

from pet_house.config import IMAGE_REQUEST_TIMEOUT, OPENAI_API_BASE
from pet_house.imagegen.prompt import ROOM_SEEDS, compose_room_prompt

GENERATE_MODEL = "dall-e-3"
EDIT_MODEL = "gpt-image-1"
GENERATE_SIZE = "1792x1024"  # 16:9 附近的横图
EDIT_SIZE = "1024x1024"


class ImageGenerationError(RuntimeError):
    """生成失败；message 可直接展示给玩家。"""


def _decode_data_uri(uri: str) -> tuple[bytes, str]:
    """data:image/png;base64,xxx -> (二进制, mime)。"""
    header, _, b64 = uri.partition(",")
    if not header.startswith("data:") or ";base64" not in header or not b64:
        raise ImageGenerationError("参考图不是 base64 data URI")
    mime = header[len("data:"):].split(";")[0] or "image/png"
    try:
        return base64.b64decode(b64), mime
    except Exception as e:
        raise ImageGenerationError(f"参考图解码失败: {e}") from e


class RoomImageService:
    """房间背景生成客户端。"""

    def __init__(
        self,
        api_key: Optional[str] = None,
        session: Optional[requests.Session] = None,
        api_base: str = OPENAI_API_BASE,
    ):
        self.api_key = api_key or os.environ.get("OPENAI_API_KEY", "").strip()
        self.session = session or requests.Session()
        self.api_base = api_base.rstrip("/")

    def generate_room_image(
        self,
        prompt: str,
        room: str,
        source_image: Optional[str] = None,
        mask: Optional[str] = None,
        strength: Optional[float] = None,
        seed: Optional[int] = None,
    ) -> str:
        """生成房间背景，成功返回 data URI，失败抛 ImageGenerationError。"""
        details = str(prompt or "").strip()
        if not details:
            raise ImageGenerationError("Prompt cannot be empty")
        room_name = getattr(room, "value", room)
        if room_name not in ROOM_SEEDS:
            raise ImageGenerationError(f"未知房间: {room_name}")
        if not self.api_key:
            raise ImageGenerationError("Missing OPENAI_API_KEY")

        if seed is None:
            seed = ROOM_SEEDS[room_name]
        composed = compose_room_prompt(room_name, details)
        use_edit = isinstance(source_image, str) and source_image.startswith("data:")
        # OpenAI 图像接口不接受 seed / strength，只记录在日志里
        print(
            f"[小屋-生成] {room_name}: {'编辑' if use_edit else '文生图'} seed={seed} strength={strength}",
            file=sys.stderr,
            flush=True,
        )
        headers = {"Authorization": f"Bearer {self.api_key}"}
        try:
            if use_edit:
                image_bytes, mime = _decode_data_uri(source_image)
                files = {"image": ("room.png", image_bytes, mime)}
                if isinstance(mask, str) and mask.startswith("data:"):
                    mask_bytes, mask_mime = _decode_data_uri(mask)
                    files["mask"] = ("mask.png", mask_bytes, mask_mime)
                r = self.session.post(
                    f"{self.api_base}/images/edits",
                    headers=headers,
                    data={"model": EDIT_MODEL, "prompt": composed, "size": EDIT_SIZE},
                    files=files,
                    timeout=IMAGE_REQUEST_TIMEOUT,
                )
            else:
                r = self.session.post(
                    f"{self.api_base}/images/generations",
                    headers=headers,
                    json={
                        "model": GENERATE_MODEL,
                        "prompt": composed,
                        "size": GENERATE_SIZE,
                        "quality": "hd",
                        "style": "vivid",
                        "response_format": "b64_json",
                    },
                    timeout=IMAGE_REQUEST_TIMEOUT,
                )
        except requests.RequestException as e:
            err = f"请求失败: {e}"
            print(f"[小屋-生成] {err}", file=sys.stderr, flush=True)
            raise ImageGenerationError(err) from e

        print(f"[小屋-生成] 响应 HTTP {r.status_code}", file=sys.stderr, flush=True)
        try:
            data = r.json()
        except ValueError:
            err = f"响应非 JSON: {r.text[:200]}"
            print(f"[小屋-生成] {err}", file=sys.stderr, flush=True)
            raise ImageGenerationError(err) from None
        if r.status_code != 200:
            msg = (data.get("error") or {}).get("message") if isinstance(data, dict) else None
            err = f"Image generation failed (HTTP {r.status_code}): {msg or r.text[:200]}"
            print(f"[小屋-生成] {err}", file=sys.stderr, flush=True)
            raise ImageGenerationError(err)

        items = data.get("data") if isinstance(data, dict) else None
        first = items[0] if isinstance(items, list) and items else None
        b64 = first.get("b64_json") if isinstance(first, dict) else None
        if not isinstance(b64, str) or not b64:
            err = "Invalid image response"
            print(f"[小屋-生成] {err}: {str(data)[:200]}", file=sys.stderr, flush=True)
            raise ImageGenerationError(err)
        return f"data:image/png;base64,{b64}"
