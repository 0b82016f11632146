from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

from qle_tools.qle.mirror import (
    MirrorReadOnlyError,
    MirrorSync,
    MirrorView,
    live_append,
    live_prefix,
    render,
)
from qle_tools.qle.table import HEADER

DATA_FILE = Path(Path(__file__).parent, "data/test.qle")


def test_render_example() -> None:
    text = (
        "20230501 1400 20M CW 599 599 W1ABC 100W\n"
        "20230415 0900 40M SSB 589 589 K2XYZ 50\n"
    )
    table = render(text)
    lines = table.splitlines()
    assert lines[0] == HEADER
    assert len(lines) == 3
    assert "K2XYZ" in lines[1]
    assert "W1ABC" in lines[2]
    assert table.endswith("\n")


def test_render_data_file() -> None:
    table = render(DATA_FILE.read_text())
    calls = [line.split()[6] for line in table.splitlines()[1:]]
    assert calls == ["K2XYZ", "VE7LTX", "W1ABC", "N/A"]


def test_render_empty() -> None:
    assert render("") == HEADER + "\n"
    assert render("\n   \n\n") == HEADER + "\n"


def test_render_idempotent() -> None:
    text = DATA_FILE.read_text()
    assert render(text) == render(text)


@pytest.mark.parametrize(
    "now,expected",
    [
        (datetime(2023, 5, 1, 14, 0), "20230501 1400 "),
        (datetime(2023, 5, 1, 14, 0, 59, tzinfo=timezone.utc), "20230501 1400 "),
        # Converted to UTC
        (
            datetime(2023, 5, 1, 20, 30, tzinfo=timezone(timedelta(hours=-7))),
            "20230502 0330 ",
        ),
    ],
)
def test_live_prefix(now: datetime, expected: str) -> None:
    assert live_prefix(now) == expected


def test_live_append() -> None:
    now = datetime(2023, 4, 15, 9, 5, tzinfo=timezone.utc)
    assert live_append("15M FT8 VE7LTX", now) == "20230415 0905 15M FT8 VE7LTX"


class TestMirrorView:
    def test_insert(self) -> None:
        view = MirrorView()
        view.insert("hello")
        view.point = 0
        view.insert(">> ")
        assert view.text == ">> hello"
        assert view.point == 3

    def test_replace_locks(self) -> None:
        view = MirrorView(text="old", point=2)
        view.replace("new text")
        assert view.text == "new text"
        assert view.point == 0
        assert view.read_only

        with pytest.raises(MirrorReadOnlyError):
            view.insert("nope")
        assert view.text == "new text"


class TestMirrorSync:
    @pytest.fixture
    def log_file(self, tmp_path: Path) -> Path:
        path = Path(tmp_path, "log.qle")
        path.write_text(DATA_FILE.read_text())
        return path

    def test_refresh(self, log_file: Path) -> None:
        sync = MirrorSync(log_file, MirrorView())
        assert sync.refresh()
        assert sync.mirror.text == render(log_file.read_text())
        assert sync.mirror.point == 0
        assert sync.mirror.read_only

    def test_refresh_idempotent(self, log_file: Path) -> None:
        sync = MirrorSync(log_file, MirrorView())
        sync.refresh()
        first = sync.mirror.text
        sync.mirror.point = 42
        sync.refresh()
        assert sync.mirror.text == first
        assert sync.mirror.point == 0

    def test_refresh_picks_up_changes(self, log_file: Path) -> None:
        sync = MirrorSync(log_file, MirrorView())
        sync.refresh()
        log_file.write_text("20230101 0000 N0FOO\n")
        sync.refresh()
        assert sync.mirror.text == render("20230101 0000 N0FOO")

    def test_unreadable_source(self, log_file: Path, tmp_path: Path) -> None:
        view = MirrorView()
        MirrorSync(log_file, view).refresh()
        before = view.text

        missing = MirrorSync(Path(tmp_path, "missing.qle"), view)
        assert not missing.refresh()
        assert view.text == before

        # A directory can't be read as a log either
        assert not MirrorSync(tmp_path, view).refresh()
        assert view.text == before

    def test_undecodable_source(self, log_file: Path, tmp_path: Path) -> None:
        view = MirrorView()
        MirrorSync(log_file, view).refresh()
        before = view.text

        bad = Path(tmp_path, "bad.qle")
        bad.write_bytes(b"\xff\xfe20230501 1400 W1ABC\n")
        assert not MirrorSync(bad, view).refresh()
        assert view.text == before

    def test_unreadable_source_fresh_view(self, tmp_path: Path) -> None:
        view = MirrorView()
        assert not MirrorSync(Path(tmp_path, "missing.qle"), view).refresh()
        assert view == MirrorView()

    def test_commit(self, log_file: Path) -> None:
        sync = MirrorSync(log_file, MirrorView())
        now = datetime(2023, 4, 20, 12, 0, tzinfo=timezone.utc)
        entry = sync.commit("20M SSB 59 N0FOO", now)

        assert entry == "20230420 1200 20M SSB 59 N0FOO"
        assert log_file.read_text().endswith("\n" + entry + "\n")

        # The new entry lands between the April 15th and May 1st contacts
        calls = [line.split()[6] for line in sync.mirror.text.splitlines()[1:]]
        assert calls == ["K2XYZ", "VE7LTX", "N0FOO", "W1ABC", "N/A"]

    def test_commit_missing_newline(self, tmp_path: Path) -> None:
        log_file = Path(tmp_path, "log.qle")
        log_file.write_text("20230501 1400 W1ABC")
        sync = MirrorSync(log_file, MirrorView())
        now = datetime(2023, 5, 1, 15, 0, tzinfo=timezone.utc)
        sync.commit("K2XYZ\n", now)
        assert log_file.read_text() == (
            "20230501 1400 W1ABC\n" "20230501 1500 K2XYZ\n"
        )

    def test_commit_new_file(self, tmp_path: Path) -> None:
        log_file = Path(tmp_path, "new.qle")
        sync = MirrorSync(log_file, MirrorView())
        sync.commit("W1ABC", datetime(2023, 5, 1, 15, 0))
        assert log_file.read_text() == "20230501 1500 W1ABC\n"
        assert "W1ABC" in sync.mirror.text
