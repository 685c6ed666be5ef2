import threading

from frontend.poller import TimePoller


class CountingView:
    def __init__(self, fail_first=0):
        self.calls = 0
        self.fail_first = fail_first
        self.reached = threading.Event()
        self.called = threading.Event()

    def refresh_time(self):
        self.calls += 1
        self.called.set()
        if self.calls >= 3:
            self.reached.set()
        if self.calls <= self.fail_first:
            raise RuntimeError("boom")


def test_polls_immediately_and_repeatedly():
    view = CountingView()
    poller = TimePoller(view, interval=0.01)
    poller.start()
    try:
        assert view.reached.wait(2)
    finally:
        poller.stop(timeout=1)
    assert view.calls >= 3


def test_errors_do_not_stop_polling():
    view = CountingView(fail_first=2)
    poller = TimePoller(view, interval=0.01)
    poller.start()
    try:
        assert view.reached.wait(2)
    finally:
        poller.stop(timeout=1)


def test_stop_ends_thread():
    view = CountingView()
    poller = TimePoller(view, interval=60)
    thread = poller.start()
    assert view.called.wait(2)
    poller.stop(timeout=2)
    assert not thread.is_alive()
    assert view.calls == 1

