"""Tests for notification sinks"""
import logging
from unittest.mock import Mock

from rocketshoes.notifications import CallbackNotifier, LogNotifier, ToastQueue


def test_log_notifier(caplog):
    """Messages are logged as warnings"""
    with caplog.at_level(logging.WARNING, logger="rocketshoes.notifications"):
        LogNotifier().error("Erro na adição do produto")

    assert "Erro na adição do produto" in caplog.text


def test_callback_notifier():
    callback = Mock()

    CallbackNotifier(callback).error("boom")

    callback.assert_called_once_with("boom")


def test_toast_queue_drain():
    queue = ToastQueue()
    queue.error("first")
    queue.error("second")

    assert len(queue) == 2
    assert queue.drain() == ["first", "second"]
    assert queue.drain() == []


def test_toast_queue_drops_oldest():
    queue = ToastQueue(maxlen=2)
    for message in ("a", "b", "c"):
        queue.error(message)

    assert queue.drain() == ["b", "c"]
