"""Tests for the command line interface."""

import json

import pytest

from graphdiagram import cli


@pytest.fixture
def run(tmp_path, capsys):
    """Fixture running CLI commands against a temporary data directory."""

    async def runner(*args: str, storage: str = "json"):
        argv = ["--data-dir", str(tmp_path / "data"), "--storage", storage, *args]
        status = await cli.main(argv)
        captured = capsys.readouterr()
        return status, captured.out.strip().splitlines(), captured.err

    return runner


async def test_connect_and_list(run):
    """Edges created by connect are listed as JSON lines."""
    status, out, _ = await run("connect", "A", "B", "--cost", "4", "--comment", "x")
    assert status == 0
    edge = json.loads(out[0])
    assert (edge["departure"], edge["destination"], edge["cost"], edge["comment"]) == (
        "A",
        "B",
        4,
        "x",
    )

    await run("connect", "A", "B", "--cost", "4", "--comment", "x")
    await run("connect", "C", "A", "--undirected")

    status, out, _ = await run("list")
    assert status == 0
    assert [json.loads(line)["directed"] for line in out] == [True, False]


async def test_disconnect(run):
    """disconnect removes the edge, and reports when there is none."""
    await run("connect", "A", "B")
    await run("connect", "B", "C", "--undirected")

    status, _, _ = await run("disconnect", "A", "B")
    assert status == 0
    status, _, _ = await run("disconnect", "C", "B", "--undirected")
    assert status == 0

    status, out, _ = await run("disconnect", "A", "B")
    assert status == 1
    assert out == ["no edge"]

    _, out, _ = await run("list")
    assert out == []


@pytest.mark.parametrize("storage", ["json", "sqlite"])
async def test_path(run, storage):
    """path prints the cheapest route as JSON."""
    await run("connect", "A", "B", "--cost", "4", storage=storage)
    await run("connect", "A", "C", "--cost", "1", storage=storage)
    await run("connect", "C", "B", "--cost", "1", storage=storage)

    status, out, _ = await run("path", "A", "B", storage=storage)
    assert status == 0
    result = json.loads(out[0])
    assert result["nodes"] == ["A", "C", "B"]
    assert result["total_cost"] == 2

    status, out, _ = await run("path", "B", "A", storage=storage)
    assert status == 1
    assert out == ["no path"]


async def test_path_negative_cost(run):
    """Negative costs are reported unless explicitly allowed."""
    await run("connect", "A", "B", "--cost", "-2")

    status, _, err = await run("path", "A", "B")
    assert status == 1
    assert "Graph Operation Error" in err

    status, out, _ = await run("path", "A", "B", "--allow-negative")
    assert status == 0
    assert json.loads(out[0])["total_cost"] == -2


async def test_reachable_and_degree(run):
    """reachable answers yes/no; degree prints a count."""
    await run("connect", "A", "B")
    await run("connect", "A", "C")
    await run("connect", "D", "A", "--undirected")

    status, out, _ = await run("reachable", "D", "C")
    assert (status, out) == (0, ["yes"])
    status, out, _ = await run("reachable", "B", "A")
    assert (status, out) == (1, ["no"])

    _, out, _ = await run("degree", "A")
    assert out == ["3"]


async def test_invalid_node(run):
    """Malformed node ids are reported on stderr."""
    status, _, err = await run("connect", " ", "B")
    assert status == 1
    assert "Validation Error" in err


async def test_no_command(tmp_path, capsys):
    """Without a command the help text is printed."""
    assert await cli.main(["--data-dir", str(tmp_path)]) == 2
    assert "usage" in capsys.readouterr().out.lower()


def test_data_dir_from_environment(monkeypatch, tmp_path):
    """GRAPHDIAGRAM_DATA_DIR sets the default data directory."""
    monkeypatch.setenv(cli.DATA_DIR_ENV, str(tmp_path))
    assert cli.create_parser().parse_args(["list"]).data_dir == str(tmp_path)

    monkeypatch.delenv(cli.DATA_DIR_ENV)
    assert cli.create_parser().parse_args(["list"]).data_dir.endswith("data")


def test_storage_choices():
    """Unknown storage backends are rejected by the parser."""
    with pytest.raises(SystemExit):
        cli.create_parser().parse_args(["--storage", "redis", "list"])


def test_console_script_exits_with_status(tmp_path, capsys):
    """run() exits with the command's status."""
    argv = ["--data-dir", str(tmp_path), "--storage", "sqlite"]
    with pytest.raises(SystemExit) as exc_info:
        cli.run([*argv, "connect", "A", "B"])
    assert exc_info.value.code == 0

    with pytest.raises(SystemExit) as exc_info:
        cli.run([*argv, "reachable", "B", "A"])
    assert exc_info.value.code == 1
    assert capsys.readouterr().out.strip().splitlines()[-1] == "no"


def test_module_router(monkeypatch, tmp_path, capsys):
    """python -m graphdiagram routes 'cli' to the CLI and rejects others."""
    from graphdiagram import __main__ as entry

    monkeypatch.setattr("sys.argv", ["graphdiagram", "cli", "--data-dir", str(tmp_path), "list"])
    with pytest.raises(SystemExit) as exc_info:
        entry.main()
    assert exc_info.value.code == 0

    monkeypatch.setattr("sys.argv", ["graphdiagram", "serve"])
    with pytest.raises(SystemExit) as exc_info:
        entry.main()
    assert exc_info.value.code == 1
    assert "Unknown command: serve" in capsys.readouterr().out
