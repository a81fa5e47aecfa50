# mermaid_validator/renderer.py
"""Mermaid diagram rendering through mermaid-cli: source text → image bytes.

Each call drives one short-lived mmdc process:

1. The diagram is written to the child's stdin, which is then closed so
   mmdc sees end-of-input.
2. stdout (the image) and stderr (diagnostics) are drained concurrently
   with the stdin feed and the exit wait. Reading them one after the other
   can deadlock once the unread pipe fills up.
3. The exit code decides the outcome: 0 is Valid, anything else is Invalid.
   An engine that stops reading stdin early is still judged by its exit
   code and stderr. Failures before or around the engine run (missing
   binary, pipe errors, timeout) become SystemFailure.

``render()`` never raises for runtime failures; the child is terminated and
reaped on every path out of it.
"""

import asyncio
import logging
import os
import shutil
import signal
from typing import List, Optional, Tuple, Union

from .env import RenderSettings, resolve_settings
from .errors import (
    EngineNotFoundError,
    EngineStreamError,
    MermaidValidatorError,
    RenderTimeoutError,
)
from .outcome import Invalid, OutputFormat, RenderOutcome, SystemFailure, Valid

logger = logging.getLogger(__name__)

# mmdc reads "-" as stdin/stdout. /dev/stdin and /dev/stdout are not
# reliable on Windows, WSL and some CI runners.
STDIO_TOKEN = "-"

# Seconds between terminate and kill when reaping a child
TERMINATE_GRACE_PERIOD = 5.0

_POSIX = os.name == "posix"


def build_command(fmt: OutputFormat, settings: RenderSettings) -> List[str]:
    """Build the full mmdc argument list for one render."""
    cmd = list(settings.command)
    cmd += ["-i", STDIO_TOKEN, "-o", STDIO_TOKEN, "-e", fmt.value]
    if fmt is OutputFormat.PNG:
        cmd += ["-b", "transparent"]
    if settings.puppeteer_config:
        cmd += ["-p", settings.puppeteer_config]
    return cmd


def find_engine(settings: Optional[RenderSettings] = None) -> Optional[str]:
    """Locate the engine executable on PATH.

    Returns:
        Absolute path to the executable, or None if it cannot be found.
    """
    settings = settings or resolve_settings()
    return shutil.which(settings.command[0])


async def render(
    diagram: str,
    fmt: Union[OutputFormat, str] = OutputFormat.PNG,
    settings: Optional[RenderSettings] = None,
) -> RenderOutcome:
    """Render a Mermaid diagram and classify the result.

    Args:
        diagram: Mermaid source text. May be empty; mmdc decides validity.
        fmt: Output format, PNG by default.
        settings: Engine settings. Resolved from the environment when None.

    Returns:
        Exactly one of Valid, Invalid or SystemFailure.

    Raises:
        ValueError: If ``fmt`` is not a known output format.
    """
    fmt = OutputFormat.parse(fmt)
    try:
        settings = settings or resolve_settings()
        stdout, stderr, returncode = await _run_engine(
            settings,
            build_command(fmt, settings),
            diagram.encode("utf-8"),
        )
    except MermaidValidatorError as e:
        logger.warning("mermaid-cli system failure: %s", e)
        return SystemFailure(message=str(e))
    except Exception as e:
        logger.exception("Unexpected error while rendering diagram")
        return SystemFailure(message=str(e) or type(e).__name__)

    return _classify(fmt, stdout, stderr, returncode)


def _classify(fmt: OutputFormat, stdout: bytes, stderr: str,
              returncode: int) -> RenderOutcome:
    """Map a finished engine run to an outcome."""
    if returncode == 0:
        return Valid(image=stdout, mime_type=fmt.mime_type)

    # A nonzero exit is always reported as a rejected diagram, even when
    # the engine itself crashed; callers rely on the Invalid shape.
    logger.debug("mermaid-cli exited with code %s: %s", returncode, stderr)
    return Invalid(
        main_error=f"mermaid-cli process exited with code {returncode}",
        detail=stderr or None,
    )


async def _run_engine(settings: RenderSettings, cmd: List[str],
                      payload: bytes) -> Tuple[bytes, str, int]:
    """Run the engine once and collect (stdout, stderr, returncode)."""
    executable = find_engine(settings)
    if executable is None:
        raise EngineNotFoundError(cmd)

    logger.debug("Running mermaid-cli: %s", " ".join(cmd))
    try:
        process = await asyncio.create_subprocess_exec(
            executable,
            *cmd[1:],
            stdin=asyncio.subprocess.PIPE,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
            # Own process group so npx, node and chromium die together
            start_new_session=_POSIX,
        )
    except OSError as e:
        raise EngineNotFoundError(cmd, str(e)) from e

    try:
        return await asyncio.wait_for(
            _communicate(process, payload), timeout=settings.timeout
        )
    except asyncio.TimeoutError:
        raise RenderTimeoutError(settings.timeout)
    finally:
        await _reap(process)


async def _communicate(process: asyncio.subprocess.Process,
                       payload: bytes) -> Tuple[bytes, str, int]:
    """Feed stdin while draining stdout and stderr and awaiting exit."""
    tasks = [
        asyncio.ensure_future(_drain(process.stdout, "stdout")),
        asyncio.ensure_future(_drain(process.stderr, "stderr")),
        asyncio.ensure_future(_feed(process.stdin, payload)),
        asyncio.ensure_future(process.wait()),
    ]
    try:
        stdout, stderr, stdin_broken, returncode = await asyncio.gather(*tasks)
    finally:
        for task in tasks:
            task.cancel()
    if stdin_broken and returncode == 0:
        # Exit 0 without consuming the whole diagram: the image cannot be trusted
        raise EngineStreamError("stdin", "engine closed stdin before reading the whole diagram")
    return stdout, stderr.decode("utf-8", errors="replace"), returncode


async def _feed(stdin: asyncio.StreamWriter, payload: bytes) -> bool:
    """Write the whole payload, then close stdin to signal end-of-input.

    Returns:
        True if the engine closed its end of the pipe before taking the
        whole payload. The exit code and stderr then decide the outcome.
    """
    try:
        stdin.write(payload)
        await stdin.drain()
    except (BrokenPipeError, ConnectionResetError):
        logger.debug("mermaid-cli closed stdin early")
        return True
    except OSError as e:
        raise EngineStreamError("stdin", str(e) or type(e).__name__) from e
    finally:
        stdin.close()
    return False


async def _drain(stream: asyncio.StreamReader, channel: str) -> bytes:
    """Read a stream until EOF."""
    try:
        return await stream.read()
    except OSError as e:
        raise EngineStreamError(channel, str(e) or type(e).__name__) from e


async def _reap(process: asyncio.subprocess.Process) -> None:
    """Make sure the child has exited and been waited on."""
    if process.returncode is not None:
        return

    _send_stop(process, force=False)
    try:
        await asyncio.wait_for(process.wait(), timeout=TERMINATE_GRACE_PERIOD)
    except asyncio.TimeoutError:
        logger.warning("mermaid-cli (pid %s) ignored SIGTERM, killing", process.pid)
        _send_stop(process, force=True)
        await process.wait()


def _send_stop(process: asyncio.subprocess.Process, force: bool) -> None:
    """Terminate (or kill) the child and, on POSIX, its process group."""
    try:
        if _POSIX:
            os.killpg(process.pid, signal.SIGKILL if force else signal.SIGTERM)
        elif force:
            process.kill()
        else:
            process.terminate()
    except ProcessLookupError:
        pass
