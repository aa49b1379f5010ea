"""房间背景生成用的风格提示词。"""

ROOM_STYLE_TEMPLATE = (
    "Cozy {room} interior, flat vector illustration style, 2.5D mild perspective, "
    "clean sharp lines, solid colors, subtle cell shading, cartoonish yet detailed, "
    "warm harmonious color palette, symmetrical composition, no gradients, "
    "professional vector art, Adobe Illustrator style, high detail, isolated scene"
)

NEGATIVE_PROMPT = (
    "photorealistic, 3D render, textures, noise, gradients, blurry, low detail, sketch, "
    "rough lines, painterly style, pixelated, shadows with soft falloff, realistic lighting"
)

# 不指定 seed 时按房间固定，同一房间多次生成风格更稳定
ROOM_SEEDS = {
    "Living Room": 101,
    "Kitchen": 202,
    "Bedroom": 303,
}


def compose_room_prompt(room: str, details: str) -> str:
    """风格模板 + 玩家描述 + 反向提示词。"""
    style = ROOM_STYLE_TEMPLATE.format(room=room.lower())
    return f"{style}. Additional details: {details}. Avoid: {NEGATIVE_PROMPT}."
