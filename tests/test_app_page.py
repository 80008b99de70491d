import types

from budget_planner import app
from budget_planner.actions import BUDGET_ERROR_MESSAGE, HISTORY_ERROR_MESSAGE
from budget_planner.models import BudgetResult, HistoryEntry
from budget_planner.state import STATE_KEY, PlannerState

FORM_VALUES = {
    'email_input': 'asha@example.com',
    'income_input': 50000.0,
    'expenses_input': 30000.0,
    'savings_goal_input': 10000.0,
}


class _NullContext:
    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False


def _fake_st(calls, pressed=None, form_values=None, session_state=None):
    pressed = pressed or {}
    form_values = FORM_VALUES if form_values is None else form_values

    def record(name, result=None):
        def _fn(*args, **kwargs):
            calls.append((name, args, kwargs))
            return result
        return _fn

    def widget(name):
        def _fn(label, **kwargs):
            calls.append((name, (label,), kwargs))
            return form_values.get(kwargs.get('key'), '' if name == 'text_input' else 0.0)
        return _fn

    def button(label, **kwargs):
        calls.append(('button', (label,), kwargs))
        return pressed.get(kwargs.get('key'), False) and not kwargs.get('disabled', False)

    return types.SimpleNamespace(
        session_state={} if session_state is None else session_state,
        set_page_config=record('set_page_config'),
        title=record('title'),
        text_input=widget('text_input'),
        number_input=widget('number_input'),
        button=button,
        rerun=record('rerun'),
        subheader=record('subheader'),
        info=record('info'),
        write=record('write'),
        dataframe=record('dataframe'),
        error=record('error'),
        markdown=record('markdown'),
        caption=record('caption'),
        plotly_chart=record('plotly_chart'),
        spinner=lambda *a, **k: _NullContext(),
    )


class FakeClient:
    def __init__(self, budget_error=None):
        self.budget_error = budget_error
        self.calls = []

    def calculate_budget_sync(self, request):
        self.calls.append(('budget', request))
        if self.budget_error:
            raise self.budget_error
        return BudgetResult(savings=20000.0, recommended_savings=15000.0, inflation=5.0, message='On track')

    def fetch_history_sync(self, email):
        self.calls.append(('history', email))
        return [HistoryEntry(1, '2024-01-01T00:00:00', 50000.0, 30000.0, 20000.0, 15000.0, 'On track')]


def _buttons(calls):
    return [(kwargs['key'], args[0], kwargs['disabled']) for name, args, kwargs in calls if name == 'button']


def _names(calls):
    return [name for name, _, _ in calls]


def test_widgets_have_stable_keys(monkeypatch):
    calls = []
    monkeypatch.setattr(app, 'st', _fake_st(calls))
    state = PlannerState()
    app.render_form(state)
    inputs = [kwargs for name, _, kwargs in calls if name in ('text_input', 'number_input')]
    assert [kwargs['key'] for kwargs in inputs] == list(FORM_VALUES)
    assert all('value' not in kwargs for kwargs in inputs)
    assert state.email == 'asha@example.com'
    assert state.savings_goal == 10000.0


def test_plan_press_queues_request_and_reruns(monkeypatch):
    calls = []
    fake = _fake_st(calls, pressed={'plan_budget': True})
    monkeypatch.setattr(app, 'st', fake)
    client = FakeClient()

    app.main(client=client)

    state = fake.session_state[STATE_KEY]
    assert state.loading is True
    assert state.pending == app.BUDGET_ACTION
    assert client.calls == []
    assert 'rerun' in _names(calls)


def test_queued_submit_renders_disabled_buttons_before_request(monkeypatch):
    calls = []
    session = {STATE_KEY: PlannerState(loading=True, pending=app.BUDGET_ACTION)}
    fake = _fake_st(calls, session_state=session)
    monkeypatch.setattr(app, 'st', fake)

    class OrderedClient(FakeClient):
        def calculate_budget_sync(self, request):
            self.buttons_at_call = _buttons(calls)
            return super().calculate_budget_sync(request)

    client = OrderedClient()
    app.main(client=client)

    assert client.buttons_at_call == [
        ('plan_budget', 'Loading...', True),
        ('view_history', 'Loading...', True),
    ]
    state = session[STATE_KEY]
    assert [name for name, _ in client.calls] == ['budget', 'history']
    assert state.loading is False
    assert state.pending is None
    assert state.result.savings == 20000.0
    assert len(state.history) == 1
    assert _names(calls)[-1] == 'rerun'


def test_full_submit_cycle_renders_result(monkeypatch):
    calls = []
    fake = _fake_st(calls, pressed={'plan_budget': True})
    monkeypatch.setattr(app, 'st', fake)
    client = FakeClient()

    app.main(client=client)
    fake.button = _fake_st(calls).button
    app.main(client=client)
    calls.clear()
    app.main(client=client)

    writes = [args[0] for name, args, _ in calls if name == 'write']
    assert 'Your Savings: ₹20,000.00' in writes
    assert _buttons(calls)[0] == ('plan_budget', 'Plan My Budget', False)
    assert 'error' not in _names(calls)
    assert 'dataframe' in _names(calls)


def test_failed_submit_shows_budget_error_once(monkeypatch):
    calls = []
    session = {STATE_KEY: PlannerState(loading=True, pending=app.BUDGET_ACTION)}
    fake = _fake_st(calls, session_state=session)
    monkeypatch.setattr(app, 'st', fake)
    client = FakeClient(budget_error=RuntimeError('backend asleep'))

    app.main(client=client)
    assert session[STATE_KEY].error == BUDGET_ERROR_MESSAGE
    assert session[STATE_KEY].loading is False

    calls.clear()
    app.main(client=client)
    assert ('error', (BUDGET_ERROR_MESSAGE,), {}) in calls
    assert session[STATE_KEY].error is None

    calls.clear()
    app.main(client=client)
    assert 'error' not in _names(calls)


def test_stale_loading_flag_is_cleared(monkeypatch):
    calls = []
    session = {STATE_KEY: PlannerState(loading=True)}
    monkeypatch.setattr(app, 'st', _fake_st(calls, session_state=session))
    app.main(client=FakeClient())
    assert _buttons(calls)[0] == ('plan_budget', 'Plan My Budget', False)
    assert session[STATE_KEY].loading is False


def test_history_prompts_for_email(monkeypatch):
    calls = []
    monkeypatch.setattr(app, 'st', _fake_st(calls))
    assert app.render_history(PlannerState()) is False
    names = _names(calls)
    assert 'info' in names
    assert 'button' not in names
    assert 'dataframe' not in names


def test_history_shows_empty_message(monkeypatch):
    calls = []
    monkeypatch.setattr(app, 'st', _fake_st(calls))
    app.render_history(PlannerState(email='asha@example.com'))
    assert ('write', ('No budget history found for this email.',), {}) in calls


def test_history_table_rendered(monkeypatch):
    calls = []
    monkeypatch.setattr(app, 'st', _fake_st(calls))
    state = PlannerState(
        email='asha@example.com',
        history=[HistoryEntry(1, '2024-01-01T00:00:00', 10.0, 5.0, 5.0, 4.0, 'ok')],
    )
    app.render_history(state)
    frames = [args[0] for name, args, _ in calls if name == 'dataframe']
    assert len(frames) == 1
    assert len(frames[0]) == 1


def test_history_press_then_failure_reports_error(monkeypatch):
    calls = []
    fake = _fake_st(calls, pressed={'view_history': True})
    monkeypatch.setattr(app, 'st', fake)

    class FailingClient:
        def fetch_history_sync(self, email):
            raise RuntimeError('down')

    client = FailingClient()
    app.main(client=client)
    state = fake.session_state[STATE_KEY]
    assert state.pending == app.HISTORY_ACTION

    fake.button = _fake_st(calls).button
    app.main(client=client)
    assert state.error == HISTORY_ERROR_MESSAGE
    assert state.loading is False


def test_rerun_falls_back_to_experimental(monkeypatch):
    called = {}
    monkeypatch.setattr(
        app, 'st', types.SimpleNamespace(experimental_rerun=lambda: called.setdefault('method', 'experimental'))
    )
    app._rerun()
    assert called['method'] == 'experimental'


def test_result_block_renders_tips_and_chart(monkeypatch):
    calls = []
    monkeypatch.setattr(app, 'st', _fake_st(calls))
    state = PlannerState(
        expenses=300.0,
        result=BudgetResult(
            savings=200.0,
            recommended_savings=150.0,
            inflation=5.0,
            message='Save $50 more',
            recommendations=['Cut dining out'],
        ),
    )
    app.render_result(state)
    writes = [args[0] for name, args, _ in calls if name == 'write']
    assert 'Your Savings: ₹200.00' in writes
    assert 'Inflation Rate in India: 5.00%' in writes
    assert 'Save \\$50 more' in writes
    assert ('markdown', ('- Cut dining out',), {}) in calls
    assert any(name == 'plotly_chart' for name, _, _ in calls)
