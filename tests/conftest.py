import pytest

from battedball import Trajectory, basic_config, get_config


@pytest.fixture
def restore_config():
    saved = get_config()
    yield
    basic_config(saved)


@pytest.fixture
def default_trajectory():
    return Trajectory()
