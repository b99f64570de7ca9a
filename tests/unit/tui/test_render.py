"""Tests for rendering reducer state to text."""

from __future__ import annotations

import pytest

from iam_lens.core.app_state import AppReducer
from iam_lens.core.messages import (
    KeyPress,
    PolicyDocumentLoaded,
    RoleDetailLoaded,
    RolesFailed,
    RolesLoaded,
)
from iam_lens.tui.render import render, truncate
from iam_lens.tui.theme import DEFAULT_THEME, Theme


def _plain(reducer):
    return render(reducer, DEFAULT_THEME).plain


@pytest.fixture
def reducer(roles):
    reducer = AppReducer("default", "us-east-1")
    reducer.update(RolesLoaded(tuple(roles)))
    return reducer


def test_loading_and_error_screens():
    reducer = AppReducer("default", "us-east-1")
    assert "Loading IAM roles" in _plain(reducer)
    reducer.update(RolesFailed("AccessDenied"))
    text = _plain(reducer)
    assert "Error: AccessDenied" in text
    assert "Press 'q' to quit." in text


def test_list_shows_roles_and_status(reducer):
    text = _plain(reducer)
    for name in ("prod-admin", "dev-reader", "prod-reader"):
        assert name in text
    assert "Roles: 3" in text
    assert "Never" in text


def test_list_header_with_identity(reducer, identity):
    reducer.list_view.set_identity(identity)
    text = _plain(reducer)
    assert "Account: 123456789012" in text
    assert "User: alice" in text


def test_filter_bar(reducer):
    reducer.update(KeyPress("slash", "/"))
    for ch in "dev":
        reducer.update(KeyPress(ch, ch))
    text = _plain(reducer)
    assert "Search: dev" in text
    assert "prod-admin" not in text
    assert "Roles: 1" in text


def test_detail_and_document(reducer, policy_role):
    (request,) = reducer.update(KeyPress("enter"))
    reducer.update(RoleDetailLoaded(policy_role, request.token))
    text = _plain(reducer)
    assert "Role: app-runtime" in text
    assert "Role Information" in text

    reducer.update(KeyPress("tab"))
    reducer.update(KeyPress("tab"))
    text = _plain(reducer)
    assert "Managed Policies:" in text
    assert "kms-decrypt" in text

    (request,) = reducer.update(KeyPress("enter"))
    assert "Loading policy document..." in _plain(reducer)
    reducer.update(PolicyDocumentLoaded("ReadOnlyAccess", "Allow s3\nDeny ec2\nAllow s3 again", request.token))
    reducer.update(KeyPress("slash", "/"))
    for ch in "allow":
        reducer.update(KeyPress(ch, ch))
    text = _plain(reducer)
    assert "Policy Document: ReadOnlyAccess" in text
    assert "(1/2)" in text


def test_match_near_end_is_drawn_while_searching(reducer, policy_role):
    (request,) = reducer.update(KeyPress("enter"))
    reducer.update(RoleDetailLoaded(policy_role, request.token))
    reducer.list_view.detail.active_tab = 2
    (request,) = reducer.update(KeyPress("enter"))
    document = "\n".join(f"line {i:03d}" for i in range(100)) + "\nTARGET"
    reducer.update(PolicyDocumentLoaded("p", document, request.token))
    reducer.update(KeyPress("slash", "/"))
    for ch in "target":
        reducer.update(KeyPress(ch, ch))

    text = _plain(reducer)
    assert "TARGET" in text
    assert "(1/1)" in text


def test_loading_detail_does_not_grow_list_screen(reducer):
    before = _plain(reducer).count("\n")
    reducer.update(KeyPress("enter"))
    text = _plain(reducer)
    assert "Loading role details..." in text
    assert text.count("\n") == before


def test_current_match_is_styled_differently(reducer, policy_role):
    theme = Theme(search_match="blue", search_current_match="red")
    (request,) = reducer.update(KeyPress("enter"))
    reducer.update(RoleDetailLoaded(policy_role, request.token))
    detail = reducer.list_view.detail
    detail.active_tab = 2
    (request,) = reducer.update(KeyPress("enter"))
    reducer.update(PolicyDocumentLoaded("p", "Allow\nAllow", request.token))
    reducer.update(KeyPress("slash", "/"))
    for ch in "allow":
        reducer.update(KeyPress(ch, ch))

    styles = [str(span.style) for span in render(reducer, theme).spans]
    assert styles.count("red") == 1
    assert styles.count("blue") == 1


def test_truncate():
    assert truncate("short", 10) == "short"
    assert truncate("a-very-long-role-name", 10) == "a-very-..."
