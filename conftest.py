import pytest
from click.testing import CliRunner


def pytest_addoption(parser):
    parser.addoption(
        "--repeat", type=int, default=3, help="how many times to re-decode the same input"
    )


@pytest.fixture(scope="session")
def repeat(request):
    return request.config.getoption("repeat")


@pytest.fixture
def runner():
    return CliRunner()
