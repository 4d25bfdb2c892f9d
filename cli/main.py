# cli/main.py

"""
Entry point for the roster CLI.

Configures logging, opens storage in the data directory, loads the roster, and
runs the login loop before handing over to the Roster menu.
"""

import logging
import sys
from typing import cast

import cli.menu_helpers as helpers
import core.formatters as formatters
from cli.menu_helpers import MenuSignal
from cli.menus import roster_menu
from cli.path_utils import log_file_path, resolve_data_dir, storage_file_path
from core.storage import InMemoryStorage, JsonFileStorage
from models.roster import Roster
from models.session import SessionGate

logger = logging.getLogger(__name__)


def configure_logging(data_dir: str) -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
        filename=log_file_path(data_dir),
        encoding="utf-8",
    )


def run_cli(data_dir: str | None = None) -> None:
    """
    Top-level loop: log in, run the Roster menu, repeat until the user exits.

    Notes:
        - Session state lives in memory, so it ends with the process.
        - The roster is loaded once at startup; every mutation is persisted immediately.
    """
    data_dir = resolve_data_dir(data_dir)
    configure_logging(data_dir)
    logger.info("Roster CLI started with data directory %s", data_dir)

    roster = Roster.load(JsonFileStorage(storage_file_path(data_dir)))
    session = SessionGate(InMemoryStorage())

    print(f"\n{formatters.format_banner_text('STUDENT ROSTER')}")

    try:
        while True:
            if not login(session):
                exit_program()

            roster_menu.run(roster, session, data_dir)

            session.logout()

    except (KeyboardInterrupt, EOFError):
        exit_program()

    finally:
        logger.info("Roster CLI stopped")


def login(session: SessionGate) -> bool:
    """
    Prompts for credentials until a login succeeds or the user cancels.

    Returns:
        True once logged in, False if the user left the username blank.
    """
    while True:
        username = helpers.prompt_user_input_or_cancel(
            "Username (leave blank to exit):"
        )

        if username is MenuSignal.CANCEL:
            return False
        username = cast(str, username)

        password = helpers.prompt_user_input("Password:")

        response = session.login(username, password)

        if response.success:
            print(f"\nLogged in as {response.data['role'].value}.")
            return True

        print(f"\n{response.detail}")


def exit_program():
    """
    Raises:
        SystemExit: Always raised to immediately terminate execution.
    """
    exit_banner = formatters.format_banner_text("Exiting Program")
    print(f"\n{exit_banner}\n")

    raise SystemExit


if __name__ == "__main__":
    run_cli(sys.argv[1] if len(sys.argv) > 1 else None)
