from devconsole.core.history import NOT_BROWSING, EntryKind, HistoryEntry, HistoryStore, RecallBuffer


def test_recall_drops_immediate_duplicates_only() -> None:
    recall = RecallBuffer()
    for line in ["help", "help", "calc 1", "help"]:
        recall.push(line)
    assert recall.lines() == ("help", "calc 1", "help")


def test_recall_keeps_most_recent_lines_up_to_capacity() -> None:
    recall = RecallBuffer(capacity=50)
    for idx in range(60):
        recall.push(f"cmd {idx}")
    assert len(recall) == 50
    assert recall.lines()[0] == "cmd 10"
    assert recall.lines()[-1] == "cmd 59"


def test_older_walks_back_and_clamps_at_oldest() -> None:
    recall = RecallBuffer()
    for line in ["one", "two", "three"]:
        recall.push(line)
    assert [recall.older() for _ in range(4)] == ["three", "two", "one", "one"]
    assert recall.cursor == 0


def test_newer_past_newest_clears_input_and_stops_browsing() -> None:
    recall = RecallBuffer()
    for line in ["one", "two"]:
        recall.push(line)
    assert recall.newer() is None
    recall.older()
    recall.older()
    assert recall.newer() == "two"
    assert recall.newer() == ""
    assert recall.cursor == NOT_BROWSING
    assert recall.newer() is None


def test_older_on_empty_buffer_changes_nothing() -> None:
    recall = RecallBuffer()
    assert recall.older() is None
    assert not recall.browsing


def test_push_resets_cursor() -> None:
    recall = RecallBuffer()
    recall.push("one")
    recall.older()
    assert recall.browsing
    recall.push("two")
    assert not recall.browsing


def test_history_store_notifies_until_unsubscribed() -> None:
    history = HistoryStore()
    seen: list[HistoryEntry] = []
    unsubscribe = history.subscribe(seen.append)
    history.append(HistoryEntry("first"))
    unsubscribe()
    history.append(HistoryEntry("second", kind=EntryKind.INFO))
    assert [entry.output_text for entry in seen] == ["first"]
    assert len(history) == 2
    assert history.last() is not None
    assert history.last().kind is EntryKind.INFO


def test_failing_listener_does_not_block_append() -> None:
    history = HistoryStore()

    def _broken(_entry: HistoryEntry) -> None:
        raise RuntimeError("render failed")

    seen: list[HistoryEntry] = []
    history.subscribe(_broken)
    history.subscribe(seen.append)
    history.append(HistoryEntry("still recorded"))
    assert len(history) == 1
    assert len(seen) == 1
