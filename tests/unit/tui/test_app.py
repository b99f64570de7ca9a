"""Tests for the textual host driving the reducer."""

from __future__ import annotations

from unittest.mock import Mock

import pytest
from textual import events

from iam_lens.core.app_state import AppReducer, ListState
from iam_lens.core.detail_view import NormalTab, PolicyDocument
from iam_lens.core.list_view import Browsing
from iam_lens.core.messages import (
    CallerIdentityRequest,
    IdentityLoaded,
    ListRolesRequest,
    ManagedPolicyDocumentRequest,
    PolicyDocumentLoaded,
    RoleDetailLoaded,
    RoleDetailRequest,
    RolesLoaded,
)
from iam_lens.tui.app import RoleBrowserApp, key_name

DOCUMENT = "Allow s3\nDeny ec2\nAllow sqs"


class StubExecutor:
    """Answers every request immediately from fixed data."""

    def __init__(self, roles, detail_role, identity):
        self.roles = tuple(roles)
        self.detail_role = detail_role
        self.identity = identity
        self.requests = []

    def execute(self, request):
        self.requests.append(request)
        if isinstance(request, ListRolesRequest):
            return RolesLoaded(self.roles)
        if isinstance(request, CallerIdentityRequest):
            return IdentityLoaded(self.identity)
        if isinstance(request, RoleDetailRequest):
            return RoleDetailLoaded(self.detail_role, request.token)
        if isinstance(request, ManagedPolicyDocumentRequest):
            return PolicyDocumentLoaded(request.policy_name, DOCUMENT, request.token)
        return None


async def _settle(app, pilot):
    await app.workers.wait_for_complete()
    await pilot.pause()


@pytest.mark.parametrize(
    "key, character, expected",
    [
        ("G", "G", "G"),
        ("shift+g", "G", "G"),
        ("n", "n", "n"),
        ("slash", "/", "slash"),
        ("ctrl+c", "\x03", "ctrl+c"),
        ("escape", "\x1b", "escape"),
        ("down", None, "down"),
    ],
)
def test_key_name(key, character, expected):
    assert key_name(events.Key(key, character)) == expected


@pytest.mark.asyncio
async def test_browse_to_policy_document_and_quit(roles, policy_role, identity):
    executor = StubExecutor(roles, policy_role, identity)
    app = RoleBrowserApp(AppReducer("default", "us-east-1"), executor)
    exit_spy = Mock(wraps=app.exit)
    app.exit = exit_spy

    async with app.run_test(size=(120, 40)) as pilot:
        await _settle(app, pilot)
        assert isinstance(app.reducer.mode, ListState)
        assert app.reducer.identity == identity
        list_view = app.reducer.list_view

        await pilot.press("j", "G", "g")
        assert list_view.cursor == 0

        await pilot.press("enter")
        await _settle(app, pilot)
        detail = list_view.detail
        assert detail.role is policy_role

        await pilot.press("tab", "tab")
        assert detail.active_tab == 2
        await pilot.press("shift+tab", "tab")
        assert detail.active_tab == 2

        await pilot.press("enter")
        await _settle(app, pilot)
        doc = detail.mode
        assert isinstance(doc, PolicyDocument)
        assert doc.name == "ReadOnlyAccess"

        await pilot.press("slash", "a", "l", "l", "o", "w")
        assert doc.searching
        assert doc.search_input.value == "allow"
        assert [m.line for m in doc.search.matches] == [0, 2]

        await pilot.press("enter", "n")
        assert not doc.searching
        assert doc.search.current == 1
        await pilot.press("N")
        assert doc.search.current == 0

        await pilot.press("escape")
        assert isinstance(detail.mode, NormalTab)
        await pilot.press("escape")
        assert isinstance(list_view.mode, Browsing)

        exit_spy.assert_not_called()
        await pilot.press("ctrl+c")
        await pilot.pause()
        exit_spy.assert_called_once()

    # the two startup requests run on separate workers, in either order
    kinds = [type(r) for r in executor.requests]
    assert set(kinds[:2]) == {ListRolesRequest, CallerIdentityRequest}
    assert kinds[2:] == [RoleDetailRequest, ManagedPolicyDocumentRequest]


@pytest.mark.asyncio
async def test_view_is_rendered_from_reducer(roles, policy_role, identity):
    app = RoleBrowserApp(AppReducer("default", "us-east-1"), StubExecutor(roles, policy_role, identity))
    async with app.run_test(size=(120, 40)) as pilot:
        await _settle(app, pilot)
        assert app.reducer.list_view.height == 40
        await pilot.press("slash", "d", "e", "v")
        assert [r.name for r in app.reducer.list_view.filtered] == ["dev-reader"]
