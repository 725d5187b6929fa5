import asyncio

from euclid_diagram.panel import (
    LOADING_HTML,
    NO_DIAGRAM_HTML,
    PanelController,
    PanelProps,
    PanelState,
    error_payload,
    locations_for_goal,
)
from euclid_diagram.parser import parse_context
from euclid_diagram.rpc import GET_EUCLIDEAN_GOAL, GoalLookupFailure, LocalTransport, RpcError, RpcServer
from euclid_diagram.visibility import GoalsLocation, HypLocation, TargetLocation


class ScriptedTransport:
    """Transport whose responses are released by the test."""

    def __init__(self):
        self.calls = []

    async def __call__(self, method, params):
        future = asyncio.get_running_loop().create_future()
        self.calls.append((method, params, future))
        return await future


class StaticTransport:
    def __init__(self, result=None, error=None):
        self.result = result
        self.error = error
        self.calls = []

    async def __call__(self, method, params):
        self.calls.append((method, params))
        if self.error is not None:
            raise self.error
        return self.result


def props(**kwargs):
    defaults = dict(pos='p', goals=('g1', 'g2'), cursor_goal_id='g1')
    defaults.update(kwargs)
    return PanelProps(**defaults)


def test_new_panel_is_idle():
    panel = PanelController(StaticTransport({'html': None}))

    assert panel.state is PanelState.IDLE
    assert panel.render() == ''


def test_resolved_with_diagram():
    transport = StaticTransport({'html': '<svg/>'})
    panel = PanelController(transport)

    asyncio.run(panel.update(props()))

    assert panel.state is PanelState.RESOLVED
    assert panel.render() == '<svg/>'
    assert transport.calls == [(GET_EUCLIDEAN_GOAL, {'contextRef': 'p', 'goalId': 'g1', 'locs': []})]


def test_resolved_without_diagram_shows_fallback():
    panel = PanelController(StaticTransport({'html': None}))

    asyncio.run(panel.update(props()))

    assert panel.state is PanelState.RESOLVED
    assert panel.render() == NO_DIAGRAM_HTML


def test_only_locations_of_active_goal_are_sent():
    transport = StaticTransport({'html': None})
    panel = PanelController(transport)
    selected = (
        GoalsLocation('g1', HypLocation('_fvar.1')),
        GoalsLocation('g2', HypLocation('_fvar.7')),
        GoalsLocation('g1', TargetLocation('/')),
    )

    asyncio.run(panel.update(props(selected_locations=selected)))

    (_, params) = transport.calls[0]
    assert params['locs'] == [{'hyp': '_fvar.1'}, {'target': '/'}]


def test_missing_cursor_goal_errors_without_request():
    transport = StaticTransport({'html': None})
    panel = PanelController(transport)

    asyncio.run(panel.update(props(cursor_goal_id='g9')))

    assert panel.state is PanelState.ERRORED
    assert isinstance(panel.error, GoalLookupFailure)
    assert transport.calls == []
    assert "GoalLookupFailure: Could not find goal 'g9'" in panel.render()


def test_transport_failure_renders_raw_payload():
    panel = PanelController(StaticTransport(error=RpcError('internal', 'boom <b>')))

    asyncio.run(panel.update(props()))

    assert panel.state is PanelState.ERRORED
    assert error_payload(panel.error) == '{"code": "internal", "message": "boom <b>"}'
    assert 'boom &lt;b&gt;' in panel.render()


def test_unchanged_props_do_not_issue_requests():
    transport = StaticTransport({'html': '<svg/>'})
    panel = PanelController(transport)

    async def twice():
        await panel.update(props())
        await panel.update(props())

    asyncio.run(twice())

    assert len(transport.calls) == 1
    assert panel.generation == 1


def test_pending_then_stale_response_is_discarded():
    transport = ScriptedTransport()
    panel = PanelController(transport)

    async def scenario():
        first = asyncio.create_task(panel.update(props()))
        await asyncio.sleep(0)
        assert panel.state is PanelState.PENDING
        assert panel.render() == LOADING_HTML

        second = asyncio.create_task(panel.update(props(cursor_goal_id='g2')))
        await asyncio.sleep(0)
        assert len(transport.calls) == 2

        transport.calls[1][2].set_result({'html': '<new/>'})
        await second
        transport.calls[0][2].set_result({'html': '<old/>'})
        await first

    asyncio.run(scenario())

    assert panel.state is PanelState.RESOLVED
    assert panel.render() == '<new/>'


def test_stale_failure_is_discarded():
    transport = ScriptedTransport()
    panel = PanelController(transport)

    async def scenario():
        first = asyncio.create_task(panel.update(props()))
        await asyncio.sleep(0)
        second = asyncio.create_task(panel.update(props(cursor_goal_id='g2')))
        await asyncio.sleep(0)
        transport.calls[0][2].set_exception(RpcError('internal', 'late failure'))
        await first
        assert panel.state is PanelState.PENDING
        transport.calls[1][2].set_result({'html': '<ok/>'})
        await second

    asyncio.run(scenario())

    assert panel.state is PanelState.RESOLVED
    assert panel.error is None


def test_panel_against_local_server():
    snapshot = parse_context('goal g1\nh : OnLine a L\n', pos='p')
    panel = PanelController(LocalTransport(RpcServer({'p': snapshot})))

    asyncio.run(panel.update(props(goals=('g1',))))

    assert panel.state is PanelState.RESOLVED
    assert 'OnLine(a, L)' in panel.render()


def test_locations_for_goal_returns_tuple_of_inner_locations():
    selected = [
        GoalsLocation('g1', HypLocation('_fvar.0')),
        GoalsLocation('g2', HypLocation('_fvar.1')),
        GoalsLocation('g1', TargetLocation('/')),
    ]

    assert locations_for_goal(selected, 'g1') == (HypLocation('_fvar.0'), TargetLocation('/'))
    assert locations_for_goal(selected, 'g3') == ()
