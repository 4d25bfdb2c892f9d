# cli/menus/stats_menu.py

"""
Statistics menu for the student roster CLI.

All figures are computed over the current filtered and searched view, not the full roster.
"""

import cli.menu_helpers as helpers
import cli.model_formatters as model_formatters
import core.formatters as formatters
from cli.menu_helpers import MenuSignal
from core.view_pipeline import RosterView, filter_sibling_groups, sibling_groups


def run(view: RosterView) -> None:
    """
    Top-level loop with dispatch for the Statistics menu.

    Raises:
        RuntimeError: If the menu response is unrecognized.
    """
    title = formatters.format_banner_text("Statistics")
    options = [
        ("Attendance and Grade Summary", lambda: show_summary(view)),
        ("Sibling Groups", lambda: show_sibling_groups(view)),
    ]
    zero_option = "Return to Roster menu"

    while True:
        menu_response = helpers.display_menu(title, options, zero_option)

        if menu_response is MenuSignal.EXIT:
            break

        elif callable(menu_response):
            menu_response()

        else:
            raise RuntimeError(f"Unexpected MenuResponse received: {menu_response}")


def show_summary(view: RosterView) -> None:
    print(f"\n{model_formatters.format_stats(view.stats(), view.selected_date)}")


def show_sibling_groups(view: RosterView) -> None:
    groups = sibling_groups(view.filtered())

    term = helpers.prompt_user_input("Filter by mobile or name (leave blank for all):")
    groups = filter_sibling_groups(groups, term)

    print(f"\n{formatters.format_banner_text('Sibling Groups')}")

    if not groups:
        print("No sibling groups found.")
        return

    helpers.display_results(groups, show_index=True, formatter=model_formatters.format_sibling_group)
