from infrastructure.ledger import FinishedPathsLedger


def test_missing_ledger_means_nothing_finished(tmp_path):
    ledger = FinishedPathsLedger(tmp_path / "finishedPaths.log")
    assert ledger.is_finished("/data/2019-06-01") is False
    assert ledger.entries() == []


def test_empty_ledger_means_nothing_finished(tmp_path):
    path = tmp_path / "finishedPaths.log"
    path.write_text("", encoding="utf-8")
    assert FinishedPathsLedger(path).is_finished("/data/2019-06-01") is False


def test_mark_then_is_finished(tmp_path):
    ledger = FinishedPathsLedger(tmp_path / "finishedPaths.log")
    ledger.mark_finished("/data/2019-06-01")

    assert ledger.is_finished("/data/2019-06-01") is True
    assert ledger.is_finished("/data/2019-06-02") is False
    # Exact match only
    assert ledger.is_finished("/data/2019-06-01/") is False
    assert ledger.is_finished("/data/2019-06") is False


def test_mark_is_append_only_and_not_deduplicated(tmp_path):
    path = tmp_path / "logs" / "finishedPaths.log"
    ledger = FinishedPathsLedger(path)
    ledger.mark_finished("/data/a")
    ledger.mark_finished("/data/b")
    ledger.mark_finished("/data/a")

    assert path.read_text(encoding="utf-8") == "/data/a\n/data/b\n/data/a\n"
    assert FinishedPathsLedger(path).is_finished("/data/b") is True


def test_reads_crlf_terminated_entries(tmp_path):
    path = tmp_path / "finishedPaths.log"
    path.write_bytes(b"C:\\images\\2019-06-01\r\nC:\\images\\2019-06-02\r\n")
    ledger = FinishedPathsLedger(path)
    assert ledger.is_finished("C:\\images\\2019-06-02") is True


def test_unreadable_ledger_treated_as_not_finished(tmp_path):
    path = tmp_path / "finishedPaths.log"
    path.write_bytes(b"\xff\xfe\xfa not utf-8\n")
    assert FinishedPathsLedger(path).is_finished("/data/a") is False
