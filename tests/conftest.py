"""测试公共夹具：Qt 应用实例与手动时钟。"""
import pytest
from PyQt6.QtCore import QCoreApplication


class FakeClock:
    """手动推进的时钟：call_later 只登记，fire_next 才触发。"""

    def __init__(self):
        self.pending = []
        self.delays = []

    def call_later(self, delay_ms, callback):
        entry = {"delay": delay_ms, "callback": callback, "active": True}
        self.pending.append(entry)
        self.delays.append(delay_ms)

        def cancel() -> None:
            entry["active"] = False

        return cancel

    def active(self):
        return [e for e in self.pending if e["active"]]

    def fire_next(self) -> None:
        entry = self.active()[0]
        self.pending.remove(entry)
        entry["callback"]()


@pytest.fixture(scope="session", autouse=True)
def qapp():
    app = QCoreApplication.instance() or QCoreApplication([])
    yield app


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()
