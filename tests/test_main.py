from __future__ import annotations

import io

import pytest

from tmux_installer import main as main_mod
from tmux_installer.lib.env import BACKUP_PREFIX, HOME_ENV, SOURCE_ENV
from tmux_installer.lib.hostdetect import Platform
from tmux_installer.main import install, main
from tmux_installer.pipeline import InstallOptions

from .fakes import FakeRunner, clone_creates_dir, snapshot_tree

LINUX_APT = Platform(os_family="linux", kernel="Linux", package_manager="apt", distro="ubuntu")
MACOS_BREW = Platform(os_family="macos", kernel="Darwin", package_manager="brew")


@pytest.fixture
def env(monkeypatch, home, source_dir):
    monkeypatch.setenv(HOME_ENV, str(home))
    monkeypatch.setenv(SOURCE_ENV, str(source_dir))
    monkeypatch.setattr("tmux_installer.lib.pkg.is_root", lambda: False)


@pytest.fixture
def wired(monkeypatch, env):
    """Route main() to a fake runner and a fixed platform."""

    runner = FakeRunner(on_call=clone_creates_dir)
    state = {"platform": LINUX_APT}
    monkeypatch.setattr(main_mod, "CommandRunner", lambda dry_run=False: runner)
    monkeypatch.setattr(main_mod, "detect_platform", lambda: state["platform"])
    return runner, state


def _backups(home):
    return [p for p in home.iterdir() if p.name.startswith(BACKUP_PREFIX)]


def _forbid_detection(monkeypatch):
    def boom():
        raise AssertionError("platform detection must not run")

    monkeypatch.setattr(main_mod, "detect_platform", boom)


def test_help_exits_zero_and_touches_nothing(monkeypatch, env, home, capsys):
    _forbid_detection(monkeypatch)
    (home / ".tmux.conf").write_text("mine\n", encoding="utf-8")
    before = snapshot_tree(home)

    with pytest.raises(SystemExit) as exc:
        main(["--help"])

    assert exc.value.code == 0
    out = capsys.readouterr().out
    for flag in ("--skip-deps", "--skip-backup", "--force", "--help"):
        assert flag in out
    assert snapshot_tree(home) == before


@pytest.mark.parametrize("argv", [["--bogus"], ["-f", "--bogus"], ["extra"]])
def test_unknown_flag_fails_before_anything(monkeypatch, env, home, argv):
    _forbid_detection(monkeypatch)
    (home / ".tmux.conf").write_text("mine\n", encoding="utf-8")
    before = snapshot_tree(home)

    with pytest.raises(SystemExit) as exc:
        main(argv)

    assert exc.value.code != 0
    assert snapshot_tree(home) == before


def test_unsupported_os_exits_nonzero(wired, home, caplog):
    runner, state = wired
    state["platform"] = Platform(os_family="unsupported", kernel="MSYS_NT-10.0", package_manager="unknown")

    assert main(["--force"]) == 1
    assert "WSL" in caplog.text
    assert runner.calls == []
    assert list(home.iterdir()) == []


def test_declined_confirmation_is_clean_exit(wired, home, monkeypatch, caplog):
    runner, _ = wired
    monkeypatch.setattr("sys.stdin", io.StringIO("n"))

    assert main([]) == 0
    assert "Installation cancelled." in caplog.text
    assert runner.calls == []
    assert list(home.iterdir()) == []


def test_confirmation_accepts_uppercase_y(paths, source_dir):
    runner = FakeRunner()
    result = install(
        InstallOptions(skip_deps=True),
        platform=LINUX_APT,
        paths=paths,
        source_dir=source_dir,
        run=runner,
        stdin=io.StringIO("Y"),
        out=io.StringIO(),
    )
    assert result is not None
    assert paths.tmux_conf.is_file()


def test_empty_answer_cancels(paths, source_dir):
    runner = FakeRunner()
    result = install(
        InstallOptions(),
        platform=LINUX_APT,
        paths=paths,
        source_dir=source_dir,
        run=runner,
        stdin=io.StringIO("\n"),
        out=io.StringIO(),
    )
    assert result is None
    assert runner.calls == []


def test_full_forced_install(wired, home, source_dir, capsys):
    runner, _ = wired
    original = b"set -g prefix C-b\n"
    (home / ".tmux.conf").write_bytes(original)

    assert main(["-f"]) == 0

    backups = _backups(home)
    assert len(backups) == 1
    assert (backups[0] / ".tmux.conf").read_bytes() == original
    assert (home / ".tmux.conf").read_text(encoding="utf-8") == (source_dir / "tmux.conf").read_text(encoding="utf-8")
    assert (home / ".tmux" / "theme.conf").is_file()

    tpm_dir = home / ".tmux" / "plugins" / "tpm"
    assert runner.calls == [
        ["sudo", "apt-get", "update"],
        ["sudo", "apt-get", "install", "-y", "tmux", "git", "xclip"],
        ["git", "clone", "https://github.com/tmux-plugins/tpm", str(tpm_dir)],
        ["tmux", "list-sessions"],
        [str(tpm_dir / "bin" / "install_plugins")],
    ]
    assert "Quick reference" in capsys.readouterr().out


def test_skip_backup_creates_no_backup(wired, home):
    (home / ".tmux.conf").write_text("mine\n", encoding="utf-8")
    assert main(["--force", "--skip-backup", "--skip-deps"]) == 0
    assert _backups(home) == []


def test_skip_deps_runs_no_package_manager(wired):
    runner, _ = wired
    assert main(["--force", "--skip-deps"]) == 0
    assert runner.commands_starting_with("sudo") == []


def test_macos_install_appends_fragment(wired, home, source_dir):
    runner, state = wired
    state["platform"] = MACOS_BREW

    assert main(["--force"]) == 0

    base = (source_dir / "tmux.conf").read_text(encoding="utf-8")
    fragment = (source_dir / "tmux.macos.conf").read_text(encoding="utf-8")
    assert (home / ".tmux.conf").read_text(encoding="utf-8") == base + fragment
    assert runner.calls[0] == ["brew", "install", "tmux", "git", "reattach-to-user-namespace"]


def test_unknown_package_manager_warns_and_continues(wired, home, caplog):
    runner, state = wired
    state["platform"] = Platform(os_family="linux", kernel="Linux", package_manager="unknown", distro="unknown")

    assert main(["--force"]) == 0
    assert "install tmux and git manually" in caplog.text
    assert (home / ".tmux.conf").is_file()


def test_dependency_failure_aborts_with_command_status(monkeypatch, env, home):
    runner = FakeRunner(returncodes={("sudo", "apt-get", "install"): 100})
    monkeypatch.setattr(main_mod, "CommandRunner", lambda dry_run=False: runner)
    monkeypatch.setattr(main_mod, "detect_platform", lambda: LINUX_APT)
    (home / ".tmux.conf").write_text("mine\n", encoding="utf-8")

    assert main(["--force"]) == 100

    # Nothing after the failing step ran.
    assert _backups(home) == []
    assert runner.commands_starting_with("git") == []
    assert (home / ".tmux.conf").read_text(encoding="utf-8") == "mine\n"


def test_rerun_against_running_server_leaves_no_sessions(wired):
    runner, _ = wired
    assert main(["--force", "--skip-deps"]) == 0
    assert main(["--force", "--skip-deps", "--skip-backup"]) == 0
    assert runner.commands_starting_with("tmux", "new-session") == []
    assert runner.commands_starting_with("tmux", "kill-session") == []
    assert runner.commands_starting_with("git", "-C")  # second run updates TPM in place


def test_log_file_written(wired, tmp_path):
    log_path = tmp_path / "logs" / "install.log"
    assert main(["--force", "--skip-deps", "--log", str(log_path)]) == 0
    assert "Installation complete!" in log_path.read_text(encoding="utf-8")


def test_backup_copy_failure_exits_one(wired, home, monkeypatch, caplog):
    runner, _ = wired
    (home / ".tmux.conf").write_text("mine\n", encoding="utf-8")

    def deny(*args, **kwargs):
        raise PermissionError("denied")

    monkeypatch.setattr("shutil.copy2", deny)

    assert main(["--force", "--skip-deps"]) == 1

    assert "Failed to back up" in caplog.text
    assert _backups(home) == []
    assert (home / ".tmux.conf").read_text(encoding="utf-8") == "mine\n"
    # Nothing after the backup ran.
    assert runner.calls == []


def test_broken_manifest_exits_one(wired, tmp_path, monkeypatch, caplog):
    runner, _ = wired
    (tmp_path / "manifests").mkdir()
    (tmp_path / "manifests" / "packages.yaml").write_text("- just\n- a list\n", encoding="utf-8")
    monkeypatch.setattr("tmux_installer.lib.manifests._package_root", lambda: tmp_path)

    assert main(["--force"]) == 1
    assert "must be a mapping" in caplog.text
    assert runner.calls == []


def test_dry_run_changes_nothing(monkeypatch, env, home):
    # A dry-run runner only records; nothing it is asked to do happens.
    runner = FakeRunner()
    monkeypatch.setattr(main_mod, "CommandRunner", lambda dry_run=False: runner)
    monkeypatch.setattr(main_mod, "detect_platform", lambda: LINUX_APT)
    (home / ".tmux.conf").write_text("mine\n", encoding="utf-8")
    before = snapshot_tree(home)

    assert main(["--force", "--dry-run"]) == 0

    assert snapshot_tree(home) == before
    assert runner.commands_starting_with("git", "clone")
    assert runner.commands_starting_with("tmux") == []
