from curaq.errors import ExtractionFailure, FetchFailure, MarkReadFailure
from curaq.tui.controller import JOB_ARTICLES, JOB_MARK_READ, JOB_READER, NO_TOKEN_MESSAGE, NavigationController
from curaq.tui.keys import Key
from curaq.tui.renderer import reader_text_rows
from curaq.tui.state import Overlay

from fakes import make_articles, make_reader_content


def press(controller, *keys):
    for key in keys:
        controller.handle_key(key)


def settle(controller, runner):
    runner.finish_all()
    controller.process_completions()


# --- loading and refresh ---------------------------------------------------


def test_starts_loading_and_fetches_articles(controller, runner, services):
    assert controller.state.loading
    assert len(runner.jobs_of(JOB_ARTICLES)) == 1

    settle(controller, runner)

    assert not controller.state.loading
    assert len(controller.state.articles) == 5
    services.client.list_articles.assert_called_once_with(1, 100, "unread")


def test_keys_are_ignored_while_loading(controller):
    assert controller.handle_key(Key.J) is False
    assert controller.state.selected_index == 0


def test_failed_fetch_shows_error_until_refresh_succeeds(controller, runner, services):
    services.client.list_articles.side_effect = FetchFailure("HTTP 500: Server Error")
    settle(controller, runner)

    assert controller.state.error == "HTTP 500: Server Error"
    assert not controller.state.loading
    assert controller.handle_key(Key.J) is False
    assert controller.handle_key(Key.ENTER) is False

    services.client.list_articles.side_effect = None
    press(controller, Key.CTRL_R)
    assert controller.state.loading
    settle(controller, runner)

    assert controller.state.error is None
    assert len(controller.state.articles) == 5


def test_missing_token_is_an_error(services, runner):
    services.client = None
    controller = NavigationController(services, runner)
    controller.start()

    assert controller.state.error == NO_TOKEN_MESSAGE
    assert not controller.state.loading
    assert runner.jobs == []


def test_stale_refresh_is_discarded(loaded_controller, runner, services):
    services.client.list_articles.return_value = make_articles(2)
    press(loaded_controller, Key.CTRL_R)
    first = runner.jobs_of(JOB_ARTICLES)[0]
    first_result = runner.run(first)

    services.client.list_articles.return_value = make_articles(9)
    loaded_controller.refresh()
    settle(loaded_controller, runner)
    assert len(loaded_controller.state.articles) == 9

    assert loaded_controller.apply_completion(first_result) is False
    assert len(loaded_controller.state.articles) == 9


def test_refresh_clamps_selection(loaded_controller, runner, services):
    press(loaded_controller, Key.J, Key.J, Key.J, Key.J)
    assert loaded_controller.state.selected_index == 4

    services.client.list_articles.return_value = make_articles(2)
    press(loaded_controller, Key.CTRL_R)
    settle(loaded_controller, runner)
    assert loaded_controller.state.selected_index == 1


# --- list navigation -------------------------------------------------------


def test_down_and_up_are_clamped(loaded_controller):
    press(loaded_controller, Key.K)
    assert loaded_controller.state.selected_index == 0

    press(loaded_controller, *[Key.DOWN] * 10)
    assert loaded_controller.state.selected_index == 4

    press(loaded_controller, Key.UP, Key.K)
    assert loaded_controller.state.selected_index == 2


def test_navigation_on_empty_list(loaded_controller):
    loaded_controller.state.articles = []
    loaded_controller.state.selected_index = 0
    press(loaded_controller, Key.J, Key.K, Key.ENTER, Key.M, Key.O)
    assert loaded_controller.state.selected_index == 0
    assert loaded_controller.state.overlay is Overlay.NONE


def test_open_in_browser(loaded_controller, services):
    press(loaded_controller, Key.J)
    assert loaded_controller.handle_key(Key.O) is False
    services.open_url.assert_called_once_with("https://example.com/1")
    assert loaded_controller.state.overlay is Overlay.NONE


def test_q_quits_from_list(loaded_controller):
    press(loaded_controller, Key.Q)
    assert loaded_controller.running is False


def test_q_quits_from_error_and_loading(controller):
    press(controller, Key.Q)
    assert controller.running is False


# --- mark as read ----------------------------------------------------------


def test_mark_read_removes_article(loaded_controller, runner, services):
    press(loaded_controller, Key.J, Key.M)
    job = runner.jobs_of(JOB_MARK_READ)[0]
    assert job.tag == "1"

    settle(loaded_controller, runner)

    services.client.mark_read.assert_called_once_with("1")
    ids = [a.id for a in loaded_controller.state.articles]
    assert ids == ["0", "2", "3", "4"]
    assert loaded_controller.state.selected_index == 1


def test_mark_read_last_article_moves_selection_up(loaded_controller, runner):
    press(loaded_controller, *[Key.J] * 4, Key.M)
    settle(loaded_controller, runner)
    assert loaded_controller.state.selected_index == 3
    assert len(loaded_controller.state.articles) == 4


def test_mark_read_on_single_article_list(loaded_controller, runner):
    loaded_controller.state.articles = make_articles(1)
    press(loaded_controller, Key.M)
    settle(loaded_controller, runner)

    assert loaded_controller.state.articles == []
    assert loaded_controller.state.selected_index == 0


def test_mark_read_failure_keeps_article(loaded_controller, runner, services):
    services.client.mark_read.side_effect = MarkReadFailure("HTTP 500: Server Error")
    press(loaded_controller, Key.M)
    settle(loaded_controller, runner)

    assert len(loaded_controller.state.articles) == 5
    assert loaded_controller.state.error is None


# --- reader ----------------------------------------------------------------


def test_enter_opens_reader_and_loads_content(loaded_controller, runner, services):
    press(loaded_controller, Key.J, Key.ENTER)
    state = loaded_controller.state
    assert state.overlay is Overlay.READER
    assert state.reader_loading
    assert state.reader_scroll == 0
    assert runner.jobs_of(JOB_READER)[0].tag == "https://example.com/1"

    settle(loaded_controller, runner)

    services.extractor.extract.assert_called_once_with("https://example.com/1")
    assert not state.reader_loading
    assert state.reader_content.title == "A long read"


def test_reader_failure_stays_in_reader(loaded_controller, runner, services):
    services.extractor.extract.side_effect = ExtractionFailure("No readable content found")
    press(loaded_controller, Key.ENTER)
    settle(loaded_controller, runner)

    state = loaded_controller.state
    assert state.overlay is Overlay.READER
    assert state.reader_content is None
    assert state.reader_failed
    assert state.reader_error == "No readable content found"

    press(loaded_controller, Key.J)
    assert state.reader_scroll == 0

    press(loaded_controller, Key.ESCAPE)
    assert state.overlay is Overlay.NONE


def test_page_down_in_reader(loaded_controller, runner):
    # 16 rows of terminal leave 10 rows for text
    loaded_controller.resize(80, 16)
    assert loaded_controller.visible_reader_rows == reader_text_rows(16) == 10

    press(loaded_controller, Key.ENTER)
    settle(loaded_controller, runner)
    state = loaded_controller.state

    press(loaded_controller, Key.PAGE_DOWN)
    assert state.reader_scroll == 15
    press(loaded_controller, Key.SPACE)
    assert state.reader_scroll == 30
    press(loaded_controller, Key.PAGE_DOWN, Key.PAGE_DOWN)
    assert state.reader_scroll == 40

    press(loaded_controller, Key.PAGE_UP)
    assert state.reader_scroll == 25
    press(loaded_controller, Key.K, Key.UP)
    assert state.reader_scroll == 19
    press(loaded_controller, Key.J)
    assert state.reader_scroll == 22


def test_resize_reclamps_reader_scroll(loaded_controller, runner):
    loaded_controller.resize(80, 16)
    press(loaded_controller, Key.ENTER)
    settle(loaded_controller, runner)
    press(loaded_controller, *[Key.PAGE_DOWN] * 3)
    assert loaded_controller.state.reader_scroll == 40

    loaded_controller.resize(80, 36)
    assert loaded_controller.state.reader_scroll == 50 - reader_text_rows(36)


def test_reader_keys_do_not_move_list_selection(loaded_controller, runner):
    press(loaded_controller, Key.ENTER)
    settle(loaded_controller, runner)
    press(loaded_controller, Key.J, Key.J)
    assert loaded_controller.state.selected_index == 0


def test_q_closes_reader_instead_of_quitting(loaded_controller, runner):
    press(loaded_controller, Key.ENTER)
    settle(loaded_controller, runner)
    press(loaded_controller, Key.Q)

    state = loaded_controller.state
    assert loaded_controller.running
    assert state.overlay is Overlay.NONE
    assert state.reader_content is None


def test_open_in_browser_from_reader(loaded_controller, runner, services):
    press(loaded_controller, Key.J, Key.J, Key.ENTER, Key.O)
    services.open_url.assert_called_once_with("https://example.com/2")
    assert loaded_controller.state.overlay is Overlay.READER


def test_open_in_browser_from_reader_after_list_shifts(loaded_controller, runner, services):
    press(loaded_controller, Key.J, Key.J, Key.ENTER)
    settle(loaded_controller, runner)

    # an earlier mark-as-read lands while the reader is open
    loaded_controller.mark_read("0")
    settle(loaded_controller, runner)
    assert loaded_controller.state.selected_article.id == "3"

    press(loaded_controller, Key.O)
    services.open_url.assert_called_once_with("https://example.com/2")


def test_late_reader_completion_after_close_is_discarded(loaded_controller, runner):
    press(loaded_controller, Key.ENTER)
    job = runner.jobs_of(JOB_READER)[0]
    press(loaded_controller, Key.ESCAPE)

    runner.finish(job)
    assert loaded_controller.process_completions() is False

    state = loaded_controller.state
    assert state.overlay is Overlay.NONE
    assert state.reader_content is None


def test_late_reader_completion_for_previous_target_is_discarded(loaded_controller, runner, services):
    press(loaded_controller, Key.ENTER)
    stale = runner.jobs_of(JOB_READER)[0]
    press(loaded_controller, Key.ESCAPE, Key.J, Key.ENTER)
    current = runner.jobs_of(JOB_READER)[1]

    services.extractor.extract.return_value = make_reader_content(5, title="Stale")
    runner.finish(stale)
    loaded_controller.process_completions()
    assert loaded_controller.state.reader_loading
    assert loaded_controller.state.reader_content is None

    services.extractor.extract.return_value = make_reader_content(5, title="Current")
    runner.finish(current)
    loaded_controller.process_completions()
    assert loaded_controller.state.reader_content.title == "Current"


# --- theme picker ----------------------------------------------------------


def test_theme_picker_cancel_keeps_theme(loaded_controller, settings_store):
    loaded_controller.state.theme_name = "ocean"
    press(loaded_controller, Key.SHIFT_T)
    state = loaded_controller.state
    assert state.overlay is Overlay.THEME
    assert state.theme_index == 1

    press(loaded_controller, Key.K, Key.K, Key.ESCAPE)

    assert state.overlay is Overlay.NONE
    assert state.theme_name == "ocean"
    assert not settings_store.path.exists()


def test_theme_picker_confirm_persists(loaded_controller, settings_store):
    press(loaded_controller, Key.SHIFT_T, Key.J, Key.J, Key.ENTER)

    assert loaded_controller.state.theme_name == "forest"
    assert loaded_controller.state.overlay is Overlay.NONE
    assert settings_store.load().theme == "forest"


def test_theme_index_is_clamped(loaded_controller):
    press(loaded_controller, Key.SHIFT_T, *[Key.J] * 10)
    assert loaded_controller.state.theme_index == 4
    press(loaded_controller, *[Key.UP] * 10)
    assert loaded_controller.state.theme_index == 0


def test_theme_picker_q_closes_without_quitting(loaded_controller):
    press(loaded_controller, Key.SHIFT_T, Key.Q)
    assert loaded_controller.running
    assert loaded_controller.state.overlay is Overlay.NONE


def test_lowercase_t_does_not_open_theme_picker(loaded_controller):
    press(loaded_controller, "t")
    assert loaded_controller.state.overlay is Overlay.NONE


def test_theme_comes_from_settings(services, runner, settings_store):
    settings_store.set_theme("sunset")
    controller = NavigationController(services, runner)
    assert controller.state.theme_name == "sunset"

    override = NavigationController(services, runner, theme_name="mono")
    assert override.state.theme_name == "mono"


def test_broken_settings_file_does_not_prevent_startup(services, runner, settings_store):
    settings_store.path.write_bytes(b'{"theme": "\xff\xfe", "startScreen": ["read"]}')
    controller = NavigationController(services, runner)
    assert controller.state.theme_name == "default"
    assert controller.state.start_screen == "unread"

    settings_store.path.write_text('{"theme": ["ocean"]}', encoding="utf-8")
    controller = NavigationController(services, runner)
    assert controller.state.theme_name == "default"
