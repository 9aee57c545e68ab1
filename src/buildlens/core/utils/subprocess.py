from __future__ import annotations

"""Subprocess helpers with config-driven timeouts.

This module provides safe subprocess execution with:
- Config-driven timeout buckets (``timeouts.*_seconds``)
- Process-group termination so a timed-out ``bazel`` client does not linger
- No shell=True (argv lists only)
"""

import logging
import os
import shlex
import signal
import subprocess
from pathlib import Path
from time import perf_counter
from typing import Any, Sequence

from buildlens.core.config.domains.timeouts import TimeoutsConfig

logger = logging.getLogger(__name__)


def _flatten_cmd(cmd: Any) -> Sequence[str]:
    if isinstance(cmd, (list, tuple)):
        return [str(p) for p in cmd]
    return shlex.split(str(cmd))


def _infer_timeout_type(cmd: Any) -> str:
    parts = _flatten_cmd(cmd)
    if not parts:
        return "default"
    if "query" in parts[1:]:
        return "query"
    return "default"


def _popen_process_group_kwargs() -> dict[str, Any]:
    if os.name == "posix":
        return {"start_new_session": True}
    if os.name == "nt":
        creationflags = getattr(subprocess, "CREATE_NEW_PROCESS_GROUP", None)
        if isinstance(creationflags, int):
            return {"creationflags": creationflags}
    return {}


def _terminate_process_group(proc: subprocess.Popen[Any]) -> None:
    if proc.poll() is not None:
        return
    if os.name == "posix":
        try:
            os.killpg(proc.pid, signal.SIGTERM)
        except OSError:
            proc.terminate()
        try:
            proc.wait(timeout=0.2)
        except subprocess.TimeoutExpired:
            pass
        if proc.poll() is None:
            try:
                os.killpg(proc.pid, signal.SIGKILL)
            except OSError:
                proc.kill()
        try:
            proc.wait(timeout=0.2)
        except subprocess.TimeoutExpired:
            pass
        return

    proc.kill()
    try:
        proc.wait(timeout=0.2)
    except subprocess.TimeoutExpired:
        pass


def _run_capture_output_nohang(cmd: Any, *, timeout: float, **kwargs: Any) -> subprocess.CompletedProcess:
    argv = list(_flatten_cmd(cmd))
    input_value = kwargs.pop("input", None)
    cwd = kwargs.pop("cwd", None)
    env = kwargs.pop("env", None)
    text = bool(kwargs.pop("text", True))
    check = bool(kwargs.pop("check", False))
    kwargs.pop("capture_output", None)

    proc = subprocess.Popen(
        argv,
        cwd=cwd,
        env=env,
        stdin=subprocess.PIPE if input_value is not None else None,
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
        text=text,
        **_popen_process_group_kwargs(),
    )
    try:
        stdout, stderr = proc.communicate(input=input_value, timeout=timeout)
    except subprocess.TimeoutExpired as exc:
        _terminate_process_group(proc)
        try:
            stdout, stderr = proc.communicate(timeout=0.2)
        except (subprocess.TimeoutExpired, ValueError, OSError):
            stdout = getattr(exc, "output", None)
            stderr = getattr(exc, "stderr", None)
        raise subprocess.TimeoutExpired(argv, timeout, output=stdout, stderr=stderr) from None

    completed = subprocess.CompletedProcess(
        argv,
        proc.returncode if proc.returncode is not None else 0,
        stdout=stdout,
        stderr=stderr,
    )
    if check and completed.returncode != 0:
        raise subprocess.CalledProcessError(
            completed.returncode,
            argv,
            output=stdout,
            stderr=stderr,
        )
    return completed


def configured_timeout(cmd: Any, timeout_type: str | None = None, cwd: Path | str | None = None) -> float:
    """Get configured timeout for a command.

    Args:
        cmd: Command to get timeout for
        timeout_type: Explicit timeout bucket (``query`` or ``default``)
        cwd: Working directory; used as the repo root for config lookup

    Returns:
        Timeout in seconds
    """
    repo_root = Path(cwd).resolve() if cwd is not None else None
    timeout_config = TimeoutsConfig(repo_root=repo_root)

    ttype = timeout_type or _infer_timeout_type(cmd)
    timeout_map = {
        "query": timeout_config.query_seconds,
        "default": timeout_config.default_seconds,
    }
    timeout = timeout_map.get(ttype)
    if timeout is None:
        timeout = timeout_config.default_seconds
    return float(timeout)


def run_with_timeout(cmd, timeout_type: str | None = None, **kwargs):
    """Run a subprocess using the configured timeout bucket.

    Args:
        cmd: Command list/str passed through to ``subprocess.run``.
        timeout_type: Key inside the ``timeouts`` section (e.g. ``query``).
        **kwargs: Additional arguments forwarded to ``subprocess.run``.

    Returns:
        CompletedProcess from ``subprocess.run``.

    Raises:
        subprocess.TimeoutExpired: When the command exceeds its timeout.
    """
    explicit_timeout = kwargs.pop("timeout", None)
    timeout = explicit_timeout if explicit_timeout is not None else configured_timeout(
        cmd, timeout_type=timeout_type, cwd=kwargs.get("cwd")
    )

    argv = _flatten_cmd(cmd)
    logger.debug("subprocess.start argv=%s cwd=%s timeout=%s", argv, kwargs.get("cwd"), timeout)
    start = perf_counter()
    try:
        capture_output = bool(kwargs.get("capture_output", False))
        if capture_output and timeout is not None and "stdout" not in kwargs and "stderr" not in kwargs:
            result = _run_capture_output_nohang(cmd, timeout=float(timeout), **kwargs)
        else:
            result = subprocess.run(cmd, timeout=timeout, **kwargs)
    except subprocess.TimeoutExpired:
        logger.debug(
            "subprocess.timeout argv=%s after %.1fms", argv, (perf_counter() - start) * 1000.0
        )
        raise

    logger.debug(
        "subprocess.end argv=%s returncode=%s duration_ms=%.1f",
        argv,
        getattr(result, "returncode", None),
        (perf_counter() - start) * 1000.0,
    )
    return result


__all__ = [
    "run_with_timeout",
    "configured_timeout",
]
