"""Tests for the bounded shell history."""

from __future__ import annotations

import threading

from lineshell import History, Shell


def test_history_evicts_oldest_when_full():
    history = History(2)
    for line in ("a", "b", "c"):
        history.push(line)
    assert history.snapshot() == ["b", "c"]
    assert len(history) == 2


def test_history_keeps_last_entries_in_arrival_order():
    history = History(3)
    for idx in range(7):
        history.push(f"cmd{idx}")
    assert history.snapshot() == ["cmd4", "cmd5", "cmd6"]


def test_history_keeps_duplicates():
    history = History(5)
    history.push("list")
    history.push("list")
    assert history.snapshot() == ["list", "list"]


def test_history_get_and_render():
    history = History(5)
    history.push("put 1 a")
    history.push("get 1")
    assert history.get(1) == "get 1"
    assert history.get(2) is None
    assert history.get(-1) is None
    assert history.render() == ["0: put 1 a", "1: get 1"]


def test_zero_capacity_history_stays_empty():
    history = History(0)
    history.push("anything")
    assert history.snapshot() == []


def test_history_concurrent_pushes_respect_capacity():
    history = History(50)

    def worker(tag: str) -> None:
        for idx in range(200):
            history.push(f"{tag}{idx}")

    threads = [threading.Thread(target=worker, args=(tag,)) for tag in "abcd"]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    assert len(history) == 50


def test_clones_share_history_by_default(memory_io):
    shell = Shell()
    twin = shell.clone()
    assert twin.history is shell.history
    io, _ = memory_io()
    twin.process_line("help", io)
    assert shell.history.snapshot() == ["help"]


def test_clone_with_fresh_history():
    shell = Shell()
    shell.history.push("old")
    twin = shell.clone(fresh_history=True)
    assert twin.history is not shell.history
    assert twin.history.snapshot() == []
    assert twin.history.capacity == shell.history.capacity
