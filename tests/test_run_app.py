import importlib.util
import os
import subprocess
import sys

import pytest

SCRIPT = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), 'scripts', 'run_app.py')


@pytest.fixture(scope="module")
def script():
    spec = importlib.util.spec_from_file_location("run_app", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_viewer_path_exists(script):
    assert script.VIEWER.exists()
    assert script.VIEWER.name == 'app_streamlit.py'


def test_data_options_become_env_overrides(script, monkeypatch, tmp_path):
    monkeypatch.delenv('THEATER_BILLING_INVOICES', raising=False)
    env = script.build_env(plays=tmp_path / 'plays.csv', rates=tmp_path / 'rates.json')

    assert env['THEATER_BILLING_PLAYS'] == str((tmp_path / 'plays.csv').resolve())
    assert env['THEATER_BILLING_RATES'] == str((tmp_path / 'rates.json').resolve())
    assert 'THEATER_BILLING_INVOICES' not in env


def test_main_passes_streamlit_args_and_exit_code(script, monkeypatch, tmp_path):
    seen = {}

    def fake_run(cmd, env):
        seen['cmd'] = cmd
        seen['env'] = env
        return subprocess.CompletedProcess(cmd, 3)

    monkeypatch.setattr(script.subprocess, 'run', fake_run)

    with pytest.raises(SystemExit) as exc:
        script.main(['--invoices', str(tmp_path / 'invoices.json'), '--', '--server.port', '8600'])

    assert exc.value.code == 3
    assert seen['cmd'] == [sys.executable, '-m', 'streamlit', 'run', str(script.VIEWER), '--server.port', '8600']
    assert seen['env']['THEATER_BILLING_INVOICES'] == str((tmp_path / 'invoices.json').resolve())
