import os

import pytest


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch, tmp_path):
    # settings are read from PRNOTES_* variables and config files in cwd and HOME
    for name in list(os.environ):
        if name.upper().startswith("PRNOTES_"):
            monkeypatch.delenv(name)
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.chdir(tmp_path)
