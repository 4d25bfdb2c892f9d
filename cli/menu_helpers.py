# cli/menu_helpers.py

"""
Helper functions for CLI menus and user interaction in the roster application.

This module provides utilities for:
- Displaying interactive menus and result lists
- Prompting for user input and confirmation
- Selecting a student from a list of results
- Displaying standard system messages and error feedback

These functions are shared across all menu modules to maintain consistent behavior.
"""

from enum import Enum
from typing import Any, Callable, Iterable

import cli.model_formatters as model_formatters
import core.formatters as formatters
from core.response import Response
from models.session import SessionGate
from models.student import Student


class MenuSignal(Enum):
    CANCEL = "CANCEL"
    EXIT = "EXIT"


# === display methods ===


def display_menu(
    title: str,
    options: list[tuple[str, Callable[..., Any]]],
    zero_option: str = "Return",
) -> MenuSignal | Callable[..., Any]:
    """
    Displays a numbered CLI menu and returns the selected action.

    Args:
        title (str): The heading displayed above the menu options.
        options (list[tuple[str, Callable[..., Any]]]): A list of (label, action) pairs to present.
        zero_option (str, optional): The label for the "cancel" or "exit" option. Defaults to "Return".

    Returns:
        MenuSignal.EXIT if the user selects the zero option.
        Callable[..., Any]: The function associated with the selected menu item.

    Notes:
        - Menu selection is repeated until a valid choice is made.
    """
    while True:
        print(f"\n{title}")

        for i, (label, _) in enumerate(options, 1):
            print(f"{i}. {label}")

        print(f"0. {zero_option}")

        choice = prompt_user_input("Select an option: ")

        if choice == "0":
            return MenuSignal.EXIT

        try:
            # adjusts for zero-index, retrieves action from tuple
            return options[int(choice) - 1][1]

        except (ValueError, IndexError):
            print("Invalid selection. Please try again.")


def display_results(
    results: Iterable[Any],
    show_index: bool = False,
    formatter: Callable[[Any], str] = lambda x: str(x),
) -> None:
    for i, result in enumerate(results, 1):
        prefix = f"{i:>2}. " if show_index else ""
        print(f"{prefix}{formatter(result)}")


# === prompt user input methods ===

# Prompt Helpers
#
# Conventions:
# - `prompt_user_input()` is the base function, used by all others to standardize the UI format.
# - Empty string responses are overloaded for control signals:
#     - `prompt_user_input_or_cancel()` returns `MenuSignal.CANCEL` on blank input.
# - `confirm_action()` loops until the user enters a valid yes/no response.


def confirm_action(prompt: str) -> bool:
    while True:
        choice = prompt_user_input(f"{prompt} (y/n): ").lower()

        if choice == "y" or choice == "yes":
            return True

        elif choice == "n" or choice == "no":
            return False

        else:
            print("Invalid selection. Please try again.")


def prompt_user_input(prompt: str) -> str:
    return input(f"\n{prompt}\n  >> ").strip()


def prompt_user_input_or_cancel(prompt: str) -> str | MenuSignal:
    response = prompt_user_input(prompt)
    return MenuSignal.CANCEL if response == "" else response


# === finder and select methods ===


def prompt_student_selection(
    students: list[Student], description: str = "Students"
) -> Student | MenuSignal:
    """
    Prompts the user to pick one student from `students`.

    Returns:
        - The selected `Student`.
        - `MenuSignal.CANCEL` if the list is empty or the user enters "0".

    Notes:
        - A single student is returned without prompting.
        - Students are listed in the order given (the roster view order).
    """
    if not students:
        print(f"\nThere are no {description.lower()} to choose from.")
        return MenuSignal.CANCEL

    if len(students) == 1:
        return students[0]

    while True:
        print(f"\n{formatters.format_banner_text(description)}")

        display_results(students, True, model_formatters.format_student_oneline)

        choice = prompt_user_input("Select a student (0 to cancel):")

        if choice == "0":
            return MenuSignal.CANCEL

        try:
            return students[int(choice) - 1]

        except (ValueError, IndexError):
            print("\nInvalid selection. Please try again.")


# === session guards ===


def require_admin(session: SessionGate) -> bool:
    if session.can_edit:
        return True

    print("\nThis action is only available to admin users.")
    return False


# === often used messages ===


def returning_without_changes() -> None:
    print("\nReturning without changes.")


def returning_to(destination: str) -> None:
    print(f"\nReturning to {destination}.")


def display_response_failure(response: Response) -> None:
    """
    Displays a formatted error message based on a failed `Response`.

    Notes:
        - Does nothing if the response was successful.
        - Enum error codes are printed by name; string errors are printed as-is.
    """
    if response.success:
        return

    error_label = (
        response.error.name if isinstance(response.error, Enum) else str(response.error)
    )

    print(f"\n[ERROR: {error_label}] {response.detail}")
