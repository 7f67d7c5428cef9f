"""Tests for the Textual checklist driver (headless)."""

import asyncio

from archpost.checklist.actions import PackageAction
from archpost.checklist.models import MenuNode
from archpost.checklist.navigator import Navigator
from archpost.tui_textual.app import ChecklistApp
from archpost.tui_textual.constants import HELP_KEYS
from archpost.tui_textual.widgets.checklist_view import ChecklistView, format_row
from archpost.tui_textual.widgets.help_dialog import HelpDialog, help_text


def sample_tree():
    return [
        MenuNode.section(
            "Tools",
            [
                MenuNode.checkbox("git", PackageAction("git")),
                MenuNode.checkbox("fd", PackageAction("fd"), checked=False),
            ],
        ),
        MenuNode.checkbox("zsh", PackageAction("zsh")),
    ]


def test_format_row():
    tree = sample_tree()
    assert format_row(tree[0]) == "-> Tools"
    assert format_row(tree[1]) == "[x] zsh"
    assert format_row(tree[0].children[1]) == "[ ] fd"


def test_keys_toggle_and_finish():
    tree = sample_tree()
    app = ChecklistApp(Navigator(tree))
    seen = {}

    async def scenario():
        async with app.run_test() as pilot:
            view = app.query_one(ChecklistView)
            seen["root"] = list(view.rows)

            await pilot.press("enter")  # enter Tools
            seen["tools"] = list(view.rows)

            await pilot.press("down", "space")  # check fd
            await pilot.press("escape")  # back to root
            await pilot.press("down", "enter")  # uncheck zsh
            seen["cursor"] = view.cursor
            await pilot.press("q")  # leave root

    asyncio.run(scenario())

    assert seen["root"] == ["-> Tools", "[x] zsh"]
    assert seen["tools"] == ["[x] git", "[ ] fd"]
    assert seen["cursor"] == 1
    assert tree[0].children[1].checked is True
    assert tree[1].checked is False
    assert app.return_value is True


def test_ctrl_c_aborts():
    tree = sample_tree()
    app = ChecklistApp(Navigator(tree))

    async def scenario():
        async with app.run_test() as pilot:
            await pilot.press("ctrl+c")

    asyncio.run(scenario())

    assert app.return_value is False


def test_help_text_lists_every_binding():
    plain = help_text().plain
    for key, description in HELP_KEYS:
        assert key in plain
        assert description in plain


def test_help_dialog_opens_and_closes():
    tree = sample_tree()
    navigator = Navigator(tree)
    app = ChecklistApp(navigator)
    seen = {}

    async def scenario():
        async with app.run_test() as pilot:
            await pilot.press("question_mark")
            seen["open"] = isinstance(app.screen, HelpDialog)
            await pilot.press("x")
            seen["closed"] = not isinstance(app.screen, HelpDialog)
            seen["depth"] = navigator.depth
            await pilot.press("ctrl+c")

    asyncio.run(scenario())

    assert seen == {"open": True, "closed": True, "depth": 1}
    assert tree[0].checked is True
