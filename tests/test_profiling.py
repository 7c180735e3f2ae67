import pytest

import sample_workload
from callprof.ProfilerSystem.Session import Session
from callprof.utils.profiling import collect, display


def test_collect_writes_report(tmp_path):
    mirrored = []
    path = str(tmp_path / "profiler.log")
    session = collect(
        sample_workload.run, output_file=path, print_function=mirrored.append
    )
    assert not session.running
    names = {r.identity.symbol_name: r for r in session.records.all()}
    assert names["run"].call_count == 1
    assert names["fibonacci"].call_count == 1973
    assert names["build_table.make_row"].call_count == 50
    assert names["sort_words.Anon"].call_count == 6
    assert mirrored[-1] == f"> Report saved to: '{path}'"

    with open(path, "r", encoding="utf-8") as f:
        text = f.read()
    assert ": fibonacci " in text
    assert ": wait " in text


def test_collect_repeats_with_progress(tmp_path):
    path = str(tmp_path / "profiler.log")
    session = collect(
        sample_workload.run,
        output_file=path,
        repeat=2,
        show_progress=True,
        print_function=None,
    )
    names = {r.identity.symbol_name: r for r in session.records.all()}
    assert names["run"].call_count == 2
    assert not any("tqdm" in r.identity.source_label for r in session.records.all())
    with open(path, "r", encoding="utf-8") as f:
        assert "tqdm" not in f.read()


def test_collect_stops_session_when_target_fails(tmp_path):
    def failing():
        raise KeyError("boom")

    session = Session()
    with pytest.raises(KeyError):
        collect(failing, output_file=str(tmp_path / "profiler.log"), session=session)
    assert not session.running


def test_display_limits_rows(tmp_path, capsys):
    path = str(tmp_path / "profiler.log")
    collect(sample_workload.run, output_file=path, print_function=None)
    shown = display(path, limit=2)
    assert shown[0].startswith("> Total time: ")
    assert len(shown) == 7
    assert shown[-1] == shown[1]
    assert capsys.readouterr().out.splitlines() == shown
