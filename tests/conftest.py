import os

import pytest

DATA_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'data')



def read_fixture(name: str) -> bytes:
    with open(os.path.join(DATA_DIR, name), 'rb') as f:
        return f.read()


def make_line(processed='1', dropped='0', time_squeeze='0', cpu_collision='0', *optional) -> str:
    """Build a softnet_stat line with the five unused columns zeroed."""
    fields = [processed, dropped, time_squeeze, '0', '0', '0', '0', '0', cpu_collision]
    fields.extend(optional)
    return ' '.join(fields) + '\n'


@pytest.fixture
def fixture_path():
    def _path(name: str) -> str:
        return os.path.join(DATA_DIR, name)
    return _path
