"""宠物小屋：房间导航、喂食、捉迷藏与房间背景生成。"""
__version__ = "0.1.0"
