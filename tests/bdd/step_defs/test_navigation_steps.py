from pytest_bdd import scenario, given, when, then, parsers
import pytest

from curaq.tui.controller import NavigationController
from curaq.tui.state import Overlay

from fakes import make_articles

FEATURE = '../features/navigation.feature'


@scenario(FEATURE, 'Cancelling the theme picker keeps the current theme')
def test_theme_cancel():
    pass


@scenario(FEATURE, 'Confirming a theme saves it')
def test_theme_confirm():
    pass


@scenario(FEATURE, 'A late reader result after closing the reader is ignored')
def test_late_reader_result():
    pass


@scenario(FEATURE, 'Paging through a long article stops at the end')
def test_paging():
    pass


@scenario(FEATURE, 'Marking the only article as read empties the list')
def test_mark_only_article():
    pass



@given(parsers.parse('the article list is shown with {count:d} articles'), target_fixture="nav")
def article_list(services, runner, count):
    services.client.list_articles.return_value = make_articles(count)
    nav = NavigationController(services, runner)
    nav.start()
    runner.finish_all()
    nav.process_completions()
    assert not nav.state.loading
    return nav


@given(parsers.parse('the current theme is "{name}"'))
def current_theme(nav, name):
    nav.state.theme_name = name


@given(parsers.parse('the terminal is {width:d} by {height:d}'))
def terminal_size(nav, width, height):
    nav.resize(width, height)


@when(parsers.parse('the user presses "{key}"'))
def press(nav, key):
    nav.handle_key(key)


@when('the article text arrives')
@when('the server confirms')
def background_work_finishes(nav, runner):
    runner.finish_all()
    nav.process_completions()


@then(parsers.parse('the theme is still "{name}"'))
@then(parsers.parse('the theme is "{name}"'))
def theme_is(nav, name):
    assert nav.state.theme_name == name


@then(parsers.parse('the saved theme is "{name}"'))
def saved_theme(settings_store, name):
    assert settings_store.load().theme == name


@then('no overlay is open')
def no_overlay(nav):
    assert nav.state.overlay is Overlay.NONE


@then('no article text is kept')
def no_reader_content(nav):
    assert nav.state.reader_content is None
    assert nav.state.reader_target is None


@then(parsers.parse('the reader is scrolled to line {offset:d}'))
def reader_offset(nav, offset):
    assert nav.state.reader_scroll == offset


@then('the list is empty')
def list_empty(nav):
    assert nav.state.articles == []


@then(parsers.parse('the selection is {index:d}'))
def selection_is(nav, index):
    assert nav.state.selected_index == index
