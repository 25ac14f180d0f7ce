"""
Integration tests for batch export.

Covers per-file failure isolation, cooperative cancellation between ROMs,
and running the batch on a worker thread.
"""

import json
import threading

from nesgfx.formats.exporter import (
    BatchResult,
    ExportOptions,
    batch_export,
    start_batch_export,
)

FAST = ExportOptions(tile_scale=1, sheet_scale=1, spacing=0)


def test_batch_exports_each_rom(make_rom_file, tmp_path):
    """Every ROM gets its own directory with tiles, sheet and metadata."""
    paths = [
        make_rom_file("alpha.nes"),
        make_rom_file("beta.nes", chr_banks=2, flags6=0x01),
    ]
    out = tmp_path / "exports"

    result = batch_export(paths, out, FAST)

    assert result.ok
    assert len(result.exported) == 2
    assert (out / "alpha" / "alpha_sheet.png").exists()
    assert (out / "alpha" / "alpha_511.png").exists()
    assert len(list((out / "beta").glob("beta_[0-9]*.png"))) == 1024

    with open(out / "beta" / "beta.json") as f:
        meta = json.load(f)
    assert meta["mirroring"] == "Vertical"
    assert meta["chrRom"]["tileCount"] == 1024


def test_failure_is_isolated(make_rom_file, tmp_path):
    """A corrupt file is reported and the rest of the batch still runs."""
    good_1 = make_rom_file("good1.nes")
    bad_magic = make_rom_file("bad.nes", magic=b"BAD!")
    truncated = make_rom_file("short.nes", truncate=10)
    missing = tmp_path / "missing.nes"
    good_2 = make_rom_file("good2.nes")

    result = batch_export([good_1, bad_magic, truncated, missing, good_2], tmp_path / "out", FAST)

    assert [r.directory.name for r in result.exported] == ["good1", "good2"]
    failed = {path.name: message for path, message in result.failures}
    assert set(failed) == {"bad.nes", "short.nes", "missing.nes"}
    assert "Magic number mismatch" in failed["bad.nes"]
    assert "expected 8192 bytes, got 8182" in failed["short.nes"]
    assert not result.ok


def test_cancel_between_roms(make_rom_file, tmp_path):
    """Setting the event stops before the next ROM; the rest are skipped."""
    paths = [make_rom_file(f"rom{i}.nes") for i in range(4)]
    cancel = threading.Event()

    def on_progress(done, total, path):
        if done == 2:
            cancel.set()

    result = batch_export(paths, tmp_path / "out", FAST, cancel, on_progress)

    assert result.cancelled
    assert len(result.exported) == 2
    assert result.skipped == paths[2:]
    assert not (tmp_path / "out" / "rom2").exists()


def test_cancel_before_start(make_rom_file, tmp_path):
    cancel = threading.Event()
    cancel.set()
    paths = [make_rom_file("a.nes")]

    result = batch_export(paths, tmp_path / "out", FAST, cancel)

    assert result.exported == []
    assert result.skipped == paths


def test_progress_reports_every_rom(make_rom_file, tmp_path):
    paths = [make_rom_file("a.nes"), tmp_path / "nope.nes"]
    calls = []

    batch_export(paths, tmp_path / "out", FAST, on_progress=lambda *args: calls.append(args))

    assert [(done, total) for done, total, _ in calls] == [(1, 2), (2, 2)]


def test_worker_thread(make_rom_file, tmp_path):
    """start_batch_export returns immediately and delivers the result."""
    paths = [make_rom_file("x.nes"), make_rom_file("y.nes", chr_banks=0)]
    results = []

    thread = start_batch_export(paths, tmp_path / "out", FAST, on_complete=results.append)
    thread.join(timeout=60)

    assert not thread.is_alive()
    assert len(results) == 1
    assert isinstance(results[0], BatchResult)
    assert len(results[0].exported) == 2
    assert results[0].exported[1].sheet_file is None


def test_empty_batch(tmp_path):
    result = batch_export([], tmp_path / "out")
    assert result.ok
    assert result.exported == []


def test_same_name_roms_get_separate_directories(make_rom_file, tmp_path):
    """game.nes from two folders must not share (and overwrite) one directory."""
    first = make_rom_file("a/game.nes", chr_banks=2)
    second = make_rom_file("b/game.nes", chr_banks=1)
    out = tmp_path / "out"

    result = batch_export([first, second], out, FAST)

    assert result.ok
    dirs = [r.directory for r in result.exported]
    assert dirs == [out / "game", out / "game_2"]
    assert len(list((out / "game").glob("game_[0-9]*.png"))) == 1024
    assert len(list((out / "game_2").glob("game_[0-9]*.png"))) == 512

    with open(out / "game" / "game.json") as f:
        assert json.load(f)["chrRom"]["tileCount"] == 1024
    with open(out / "game_2" / "game.json") as f:
        assert json.load(f)["chrRom"]["tileCount"] == 512


def test_directory_names_ignore_case(make_rom_file, tmp_path):
    paths = [make_rom_file("a/Game.nes"), make_rom_file("b/game.nes")]

    result = batch_export(paths, tmp_path / "out", FAST)

    assert [r.directory.name for r in result.exported] == ["Game", "game_2"]


def test_worker_reports_completion_when_batch_aborts(make_rom_file, tmp_path, monkeypatch):
    """An unexpected exception still reaches on_complete (with None)."""
    errors = []
    monkeypatch.setattr(threading, "excepthook", errors.append)
    paths = [make_rom_file("x.nes")]
    results = []

    def on_progress(done, total, path):
        raise RuntimeError("progress handler broke")

    thread = start_batch_export(
        paths, tmp_path / "out", FAST, on_progress=on_progress, on_complete=results.append
    )
    thread.join(timeout=60)

    assert not thread.is_alive()
    assert results == [None]
    assert errors[0].exc_type is RuntimeError
