from __future__ import annotations

from trivia_quiz.commands import init
from trivia_quiz.core.config import config_template


def test_init_creates_workspace_and_template(isolated_env, capsys):
    assert init.main([]) == 0

    out = capsys.readouterr().out
    config_file = isolated_env / "config" / "trivia.toml"
    assert f"Workspace ready at {isolated_env} (created)" in out
    assert f"Wrote config template {config_file}" in out
    assert (isolated_env / "logs").is_dir()
    assert config_file.read_text(encoding="utf-8") == config_template()


def test_init_keeps_existing_config(isolated_env, capsys):
    init.main([])
    config_file = isolated_env / "config" / "trivia.toml"
    config_file.write_text("[quiz]\namount = 3\n", encoding="utf-8")
    capsys.readouterr()

    assert init.main([]) == 0

    out = capsys.readouterr().out
    assert "(exists)" in out
    assert "use --force to overwrite" in out
    assert config_file.read_text(encoding="utf-8") == "[quiz]\namount = 3\n"

    assert init.main(["--force"]) == 0
    assert config_file.read_text(encoding="utf-8") == config_template()


def test_init_with_explicit_path(isolated_env, tmp_path, capsys):
    target = tmp_path / "elsewhere"

    assert init.main(["--path", str(target)]) == 0

    assert (target / "config" / "trivia.toml").exists()
    assert not isolated_env.exists()
