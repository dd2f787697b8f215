import logging

from swift_driver.observers.dispatcher import EventBus
from swift_driver.observers.events import CallbackStarted, ResourceSubmitted, new_ctx
from swift_driver.observers.interface import Observer
from swift_driver.observers.logger import LoggerObserver


class Capture(Observer):
    def __init__(self): self.events = []
    def notify(self, event): self.events.append(event)


class Broken:
    def notify(self, event): raise RuntimeError("observer down")


def test_new_ctx_fields():
    ctx = new_ctx(target="swift/demo", context="lab")
    assert set(ctx) == {"ts", "run_id", "target", "context"}
    assert ctx["ts"].endswith("Z")
    assert new_ctx(target="x")["run_id"] != ctx["run_id"]


def test_bus_delivers_to_all_observers():
    a, b = Capture(), Capture()
    ev = CallbackStarted(callback="add_cluster", **new_ctx(target="swift/demo"))
    EventBus([a, b]).emit(ev)
    assert a.events == [ev] and b.events == [ev]


def test_broken_observer_does_not_break_emit():
    cap = Capture()
    EventBus([Broken(), cap]).emit(CallbackStarted(callback="add_node", **new_ctx(target="swift/n")))
    assert len(cap.events) == 1


def test_logger_observer(caplog):
    logger = logging.getLogger("observer-test")
    ev = ResourceSubmitted(kind="Service", name="swiftservice", namespace="swift",
                           **new_ctx(target="swift/demo"))
    with caplog.at_level(logging.INFO, logger="observer-test"):
        LoggerObserver(logger).notify(ev)
    assert "[EVENT] ResourceSubmitted" in caplog.text
    assert "name=swiftservice" in caplog.text
