import subprocess
from unittest import mock

from olmresolve.commitchecker.cli import main


def _fake_git(summary="UPSTREAM: 1: fix it", email="dev@example.com", log_ok=True, rev_ok=True):
    def run(args, **kwargs):
        sub = args[1]
        if sub == "log" and args[2] == "--oneline":
            if not log_ok:
                return subprocess.CompletedProcess(args, 128, "", "bad range")
            return subprocess.CompletedProcess(args, 0, f"abc123 {summary}\n", "")
        if sub == "log":
            return subprocess.CompletedProcess(args, 0, "", "")
        if sub == "diff-tree":
            return subprocess.CompletedProcess(args, 0, "README.md\n", "")
        if sub == "show":
            return subprocess.CompletedProcess(args, 0, email + "\n", "")
        if sub == "rev-parse":
            code = 0 if rev_ok else 128
            return subprocess.CompletedProcess(args, code, "", "")
        return subprocess.CompletedProcess(args, 0, "", "")

    return run


def test_valid_commits_exit_zero(capsys):
    with mock.patch("subprocess.run", side_effect=_fake_git()) as run:
        assert main([]) == 0
    assert "master..HEAD" in run.call_args_list[0].args[0]
    assert capsys.readouterr().err == ""


def test_custom_range():
    with mock.patch("subprocess.run", side_effect=_fake_git()) as run:
        assert main(["-start", "v1", "-end", "v2"]) == 0
    assert "v1..v2" in run.call_args_list[0].args[0]


def test_invalid_summary_exit_two(capsys):
    with mock.patch("subprocess.run", side_effect=_fake_git(summary="wrong summary")):
        assert main([]) == 2
    err = capsys.readouterr().err
    assert "UPSTREAM commit abc123 has invalid summary wrong summary." in err


def test_root_author_reported(capsys):
    with mock.patch("subprocess.run", side_effect=_fake_git(email="root@localhost")):
        assert main([]) == 2
    assert 'Commit abc123 has invalid email "root@localhost"' in capsys.readouterr().err


def test_not_a_commit_is_warning(capsys):
    with mock.patch("subprocess.run", side_effect=_fake_git(log_ok=False, rev_ok=False)):
        assert main([]) == 0
    assert capsys.readouterr().err.startswith(
        "WARNING: one of the provided commits does not exist, not a true branch"
    )


def test_log_failure_is_error(capsys):
    with mock.patch("subprocess.run", side_effect=_fake_git(log_ok=False)):
        assert main(["--start", "a", "--end", "b"]) == 1
    assert capsys.readouterr().err.startswith("ERROR: couldn't find commits from a..b:")