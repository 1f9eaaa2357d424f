# Copyright The Volcano Authors.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
Process helpers for running external commands with captured output.

Each invocation gets its own `CommandCapture`, opened by `capture_command` and
finalized on every exit path, so the caller always receives the stdout, stderr
and error message of the run even when the process could not be spawned.
"""

import io
import logging
import shlex
import subprocess
from contextlib import contextmanager
from typing import Iterator, List, Optional, Sequence, Union

from modelmove.exceptions import InvocationError

logger = logging.getLogger(__name__)


def _to_text(data: Union[str, bytes, None]) -> str:
    if data is None:
        return ""
    if isinstance(data, bytes):
        return data.decode("utf-8", errors="replace")
    return data


class CommandCapture:
    """Accumulated output of a single command invocation."""

    def __init__(self, argv: Sequence[str]) -> None:
        self.argv: List[str] = list(argv)
        self.returncode: Optional[int] = None
        self.error: Optional[str] = None
        # Set when the process could not be started or did not finish
        self.invocation_error: Optional[InvocationError] = None
        self.stdout = ""
        self.stderr = ""
        self._stdout = io.StringIO()
        self._stderr = io.StringIO()
        self._finalized = False

    @property
    def command_line(self) -> str:
        return shlex.join(self.argv)

    @property
    def ok(self) -> bool:
        return self._finalized and self.error is None and self.returncode == 0

    def feed(self, stdout: Union[str, bytes, None] = None, stderr: Union[str, bytes, None] = None) -> None:
        if self._finalized:
            raise RuntimeError(f"Output of '{self.command_line}' is already finalized")
        self._stdout.write(_to_text(stdout))
        self._stderr.write(_to_text(stderr))

    def fail(self, message: str) -> None:
        self.error = message

    def abort(self, reason: str) -> None:
        self.fail(reason)
        self.invocation_error = InvocationError(self.command_line, reason)

    def finalize(self) -> None:
        if self._finalized:
            return
        self.stdout = self._stdout.getvalue()
        self.stderr = self._stderr.getvalue()
        self._stdout.close()
        self._stderr.close()
        self._finalized = True


@contextmanager
def capture_command(argv: Sequence[str]) -> Iterator[CommandCapture]:
    """Open a capture for one invocation of `argv`.

    Spawn errors, timeouts and other subprocess errors raised inside the block
    are recorded on the capture instead of propagating.
    """
    capture = CommandCapture(argv)
    try:
        yield capture
    except subprocess.TimeoutExpired as e:
        capture.feed(e.stdout, e.stderr)
        capture.abort(f"The process '{capture.argv[0]}' timed out after {e.timeout}s")
    except FileNotFoundError:
        capture.abort(f"Unable to locate executable file: {capture.argv[0]}")
    except (OSError, subprocess.SubprocessError) as e:
        capture.abort(str(e) or e.__class__.__name__)
    finally:
        capture.finalize()


class CommandRunner:
    """Runs external commands synchronously with silent, separate stdout/stderr capture."""

    def __init__(self, timeout: Optional[float] = None, verbose: bool = False) -> None:
        self.timeout = timeout
        self.verbose = verbose

    def run(self, argv: Sequence[str]) -> CommandCapture:
        """
        Run a command and wait for it to exit.

        Args:
            argv: Command and arguments, run without a shell

        Returns:
            The finalized CommandCapture of the invocation
        """
        if self.verbose:
            logger.debug(f"Running: {shlex.join(argv)}")

        with capture_command(argv) as capture:
            completed = subprocess.run(
                list(argv),
                stdin=subprocess.DEVNULL,
                capture_output=True,
                text=True,
                timeout=self.timeout,
                check=False,
            )
            capture.feed(completed.stdout, completed.stderr)
            capture.returncode = completed.returncode
            if completed.returncode != 0:
                capture.fail(f"The process '{capture.argv[0]}' failed with exit code {completed.returncode}")

        return capture
