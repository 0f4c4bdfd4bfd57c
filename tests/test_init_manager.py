"""Tests for the background listing loader."""

from __future__ import annotations

import threading

from manuals.init_manager import InitializationManager, InitStage
from manuals.manpage import ManEntry, ProcessError


LISTING = [(ManEntry("ls", "1"), "ls (1) - list directory contents")]


class TestInitializationManager:
    def test_initial_status(self):
        manager = InitializationManager()
        assert manager.get_status().stage == InitStage.NOT_STARTED
        assert manager.get_listing() == []
        assert not manager.is_running()

    def test_successful_load(self):
        manager = InitializationManager()
        manager.start_initialization(lambda: LISTING)
        manager.wait(5)
        assert manager.is_complete()
        assert not manager.is_error()
        assert manager.get_listing() == LISTING
        assert manager.get_status().count == 1

    def test_failed_load(self):
        def fail():
            raise ProcessError(["man", "-k", ""], 1)

        manager = InitializationManager()
        manager.start_initialization(fail)
        manager.wait(5)
        assert manager.is_error()
        assert manager.get_status().error == "manual renderer unavailable"
        assert manager.get_listing() == []

    def test_callbacks_see_each_stage(self):
        stages = []
        manager = InitializationManager()
        manager.add_status_callback(lambda status: stages.append(status.stage))
        manager.start_initialization(lambda: LISTING)
        manager.wait(5)
        assert stages == [InitStage.LISTING, InitStage.COMPLETE]

    def test_failing_callback_does_not_stop_loading(self):
        def broken(status):
            raise RuntimeError("callback bug")

        manager = InitializationManager()
        manager.add_status_callback(broken)
        manager.start_initialization(lambda: LISTING)
        manager.wait(5)
        assert manager.is_complete()

    def test_second_start_while_running_is_ignored(self):
        release = threading.Event()
        calls = []

        def slow():
            calls.append(1)
            release.wait(5)
            return LISTING

        manager = InitializationManager()
        manager.start_initialization(slow)
        manager.start_initialization(slow)
        release.set()
        manager.wait(5)
        assert calls == [1]
