# cli/path_utils.py

import os

import config


def get_data_dir(user_input: str | None = None) -> str:
    """
    Resolves the directory holding roster storage, logs, and exports.

    Args:
        user_input (str | None): An optional user-specified directory path.

    Returns:
        The user path if given, else `$ROSTER_DATA_DIR`, else `~/Documents/Rosters`, with `~` expanded.
    """
    if user_input:
        return os.path.expanduser(user_input.strip())

    return os.path.expanduser(
        os.environ.get(config.DATA_DIR_ENV_VAR) or config.DEFAULT_DATA_DIR
    )


def resolve_data_dir(user_input: str | None = None) -> str:
    """
    Produces an absolute data directory path and creates it on disk if needed.
    """
    data_dir = os.path.abspath(get_data_dir(user_input))

    os.makedirs(data_dir, exist_ok=True)

    return data_dir


def storage_file_path(data_dir: str) -> str:
    return os.path.join(data_dir, config.LOCAL_STORAGE_FILENAME)


def log_file_path(data_dir: str) -> str:
    return os.path.join(data_dir, config.LOG_FILENAME)
