from unittest.mock import MagicMock

import pytest

from curaq.config import SettingsStore
from curaq.tui.controller import NavigationController, Services

from fakes import FakeRunner, make_articles, make_reader_content


@pytest.fixture
def settings_store(tmp_path):
    return SettingsStore(tmp_path / "config.json")


@pytest.fixture
def runner():
    return FakeRunner()


@pytest.fixture
def services(settings_store):
    client = MagicMock()
    client.list_articles.return_value = make_articles(5)
    extractor = MagicMock()
    extractor.extract.return_value = make_reader_content(50)
    return Services(
        client=client,
        extractor=extractor,
        open_url=MagicMock(),
        settings=settings_store,
    )


@pytest.fixture
def controller(services, runner):
    ctrl = NavigationController(services, runner, width=80, height=24)
    ctrl.start()
    return ctrl


@pytest.fixture
def loaded_controller(controller, runner):
    """A controller past the first article fetch, showing the list."""
    runner.finish_all()
    controller.process_completions()
    return controller
