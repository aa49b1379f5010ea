"""宠物小屋入口（无界面）：启动会话，宠物在各房间自主走动，Ctrl+C 退出。"""
import signal
import sys

from PyQt6.QtCore import QCoreApplication, QTimer

from pet_house import __version__
from pet_house.config import ensure_dirs
from pet_house.game.provider import GameProvider
from pet_house.game.storage import GameStorage


def main() -> None:
    ensure_dirs()
    app = QCoreApplication(sys.argv)
    app.setApplicationName("宠物小屋")
    app.setApplicationVersion(__version__)

    provider = GameProvider(storage=GameStorage())

    def on_state_changed(state) -> None:
        print(
            f"[小屋] 宠物在 {state.pet.current_room}，玩家在看 {state.player.current_view}",
            file=sys.stderr,
            flush=True,
        )

    provider.stateChanged.connect(on_state_changed)
    app.aboutToQuit.connect(provider.stop)
    signal.signal(signal.SIGINT, lambda *_: app.quit())
    # 让 Python 有机会处理 SIGINT
    tick = QTimer()
    tick.timeout.connect(lambda: None)
    tick.start(200)

    provider.start()
    code = app.exec()
    provider.stop()
    sys.exit(code)


if __name__ == "__main__":
    main()
