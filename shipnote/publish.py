"""Package publishing."""

import logging
import subprocess

from .errors import PublishError


logger = logging.getLogger(__name__)


def publish_package(command: str) -> None:
    """Run the configured publish command.

    The command goes through the shell so it may use globs such as
    ``dist/*`` or chain several steps.

    Args:
        command: Shell command that uploads the package

    Raises:
        PublishError: If the command exits with a non-zero status
    """
    logger.info(f"Publishing package: {command}")
    try:
        subprocess.run(command, shell=True, check=True, capture_output=True, text=True)
    except subprocess.CalledProcessError as e:
        details = (e.stderr or e.stdout or "").strip()
        raise PublishError(f"Publish command failed (exit {e.returncode}): {details}")
