import pytest


@pytest.fixture(autouse=True, scope='session')
def _private_config_dir():
    # Mirror compact_bar_tests.main.run_tests, which runs the suite against a temporary config dir
    from compact_bar_tests.main import private_config_dir
    with private_config_dir():
        yield
