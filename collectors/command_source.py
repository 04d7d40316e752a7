"""Source that runs a shell command and returns its combined output."""

from __future__ import annotations

import subprocess
from dataclasses import dataclass

from .base import BaseSource, SourceFetchError, SourceKind

COMMAND_TIMEOUT = 30


def _decode(output: bytes | str | None) -> str:
    if output is None:
        return ""
    if isinstance(output, bytes):
        return output.decode("utf-8", errors="replace")
    return output


@dataclass(frozen=True)
class CommandSource(BaseSource):
    command: str
    kind = SourceKind.COMMAND

    @property
    def locator(self) -> str:
        return self.command

    def fetch(self) -> str:
        try:
            # stderr is folded into stdout so failures carry the full output
            result = subprocess.run(
                self.command,
                shell=True,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                timeout=COMMAND_TIMEOUT,
            )
        except subprocess.TimeoutExpired as e:
            raise SourceFetchError(
                f"command execution failed: timed out after {COMMAND_TIMEOUT}s, "
                f"output: {_decode(e.output)}"
            ) from e
        except (OSError, ValueError) as e:
            raise SourceFetchError(f"command execution failed: {e}") from e

        output = _decode(result.stdout)
        if result.returncode != 0:
            raise SourceFetchError(
                f"command execution failed: exit status {result.returncode}, output: {output}"
            )
        return output
