# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Headless Selenium browser containers used by WebDriver acceptance suites."""

from __future__ import annotations

import shutil
import time
from typing import Final

from .errors import UnsupportedBrowser
from .process import run_command

# Edge has WebDriver capabilities in the generated config but no working container.
AVAILABLE_BROWSERS: Final[tuple[str, ...]] = ("chrome", "firefox")
DEFAULT_BROWSER: Final[str] = "chrome"
SELENIUM_TAG: Final[str] = "4.0.0-20211102"
BOOT_DELAY_SECONDS: Final[float] = 5.0


def container_name(subdomain: str) -> str:
    """Return the Docker container name used for ``subdomain``."""

    return f"{subdomain}_selenium"


def start_browser_container(
    subdomain: str,
    browser: str | None = DEFAULT_BROWSER,
    *,
    boot_delay: float = BOOT_DELAY_SECONDS,
) -> int:
    """Start a standalone Selenium container for ``browser``.

    Any lingering container for the project is removed first. The container
    shares the host network so WebDriver is reachable on port 4444.

    Args:
        subdomain: Project subdomain used to name the container.
        browser: Browser flavour, ``chrome`` when empty.
        boot_delay: Seconds to wait for Selenium to accept connections.

    Returns:
        int: Exit status of ``docker run``.

    Raises:
        UnsupportedBrowser: If ``browser`` is not one of :data:`AVAILABLE_BROWSERS`.
    """

    browser = browser or DEFAULT_BROWSER
    if browser not in AVAILABLE_BROWSERS:
        raise UnsupportedBrowser(browser, AVAILABLE_BROWSERS)

    stop_browser_container(subdomain)

    size = shutil.get_terminal_size()
    completed = run_command(
        [
            "docker",
            "run",
            "-d",
            "-e",
            f"COLUMNS={size.columns}",
            "-e",
            f"LINES={size.lines}",
            "--network=host",
            f"--name={container_name(subdomain)}",
            "--shm-size=2g",
            f"selenium/standalone-{browser}:{SELENIUM_TAG}",
        ],
    )
    if completed.returncode == 0 and boot_delay > 0:
        time.sleep(boot_delay)
    return completed.returncode


def stop_browser_container(subdomain: str) -> int:
    """Remove the project's Selenium container when one exists.

    Returns:
        int: Exit status of the failing docker call, or ``0`` when nothing was running.
    """

    name = container_name(subdomain)
    listing = run_command(
        ["docker", "ps", "-q", "-a", "--filter", f"name={name}"],
        overrides={"capture_output": True},
    )
    if listing.returncode != 0:
        return listing.returncode
    if not (listing.stdout or "").strip():
        return 0
    return run_command(["docker", "rm", "-f", name], overrides={"capture_output": True}).returncode


__all__ = [
    "AVAILABLE_BROWSERS",
    "DEFAULT_BROWSER",
    "container_name",
    "start_browser_container",
    "stop_browser_container",
]
