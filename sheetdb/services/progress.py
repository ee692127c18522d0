from __future__ import annotations

import logging
import sys
from typing import Any

from tqdm import tqdm
from tqdm.std import tqdm as TqdmType

"""Console progress sink with tqdm (TTY only).

The conversion pipeline reports a fixed sequence of milestones. On a TTY they
drive a small tqdm bar; elsewhere (CI, redirected output) each milestone becomes
an INFO log line so no ANSI control sequences end up in captured output.
"""

__all__ = [
    "MILESTONE_COUNT",
    "ConsoleProgress",
    "is_tty_enabled",
]

# fetch, found, create, insert, success
MILESTONE_COUNT = 5


def is_tty_enabled() -> bool:
    return sys.stdout.isatty()


class ConsoleProgress:
    """Callable progress sink rendering pipeline milestones.

    Usable directly as the ``progress`` argument of ``convert_sheet``.
    """

    def __init__(self, logger: logging.Logger, *, description: str = "Converting") -> None:
        self.logger = logger
        self.description = description
        self.messages: list[str] = []

        self.enabled = is_tty_enabled()
        self.pbar: TqdmType[Any] | None
        if self.enabled:
            self.pbar = tqdm(
                total=MILESTONE_COUNT,
                desc=description,
                unit="step",
                disable=False,
                leave=True,
                position=0,
                ncols=80,
                ascii=True,
            )
        else:
            self.pbar = None

    def __call__(self, message: str) -> None:
        self.messages.append(message)
        if self.enabled and self.pbar is not None:
            self.pbar.set_description(f"{self.description} ({message})")
            self.pbar.update(1)
        else:
            self.logger.info(message)

    def close(self) -> None:
        if self.enabled and self.pbar is not None:
            self.pbar.set_description(self.description)
            self.pbar.close()
            self.pbar = None

    def __enter__(self) -> ConsoleProgress:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()
