"""Run ``bazel query`` and turn its output into a :class:`QueryResult`.

``BazelQuery`` is one invocation (argv, subprocess, parsing). ``BazelQueryRunner``
adapts it to the ``QueryRunner`` protocol that code lens composition consumes.
"""
from __future__ import annotations

import asyncio
import logging
import subprocess
from pathlib import Path
from typing import Optional, Protocol, Sequence

from buildlens.core.config.domains.query import QueryConfig
from buildlens.core.exceptions import (
    QueryParseError,
    QueryProcessError,
    QueryTimeoutError,
)
from buildlens.core.utils.subprocess import run_with_timeout

from .models import QueryResult
from .parsers import get_parser, list_parsers

logger = logging.getLogger(__name__)


class QueryRunner(Protocol):
    """Anything that can answer a query expression for a workspace."""

    async def run_query(
        self,
        working_directory: Path,
        expression: str,
        extra_args: Sequence[str] = (),
    ) -> QueryResult:
        ...


class BazelQuery:
    """A single ``bazel query`` invocation rooted at ``workspace``."""

    def __init__(
        self,
        workspace: Path | str,
        expression: str,
        extra_args: Sequence[str] = (),
        *,
        config: Optional[QueryConfig] = None,
    ) -> None:
        self.workspace = Path(workspace)
        self.expression = expression
        self.extra_args = tuple(str(a) for a in extra_args)
        self.config = config if config is not None else QueryConfig(repo_root=self.workspace)

    def build_argv(self) -> list[str]:
        return [
            self.config.executable,
            *self.config.startup_args,
            "query",
            *self.config.args,
            f"--output={self.config.output}",
            *self.extra_args,
            self.expression,
        ]

    def run(self) -> str:
        """Execute the query and return its stdout.

        Raises:
            QueryTimeoutError: The query exceeded ``timeouts.query_seconds``.
            QueryProcessError: Bazel could not be started or exited non-zero.
        """
        argv = self.build_argv()
        logger.debug("bazel query in %s: %s", self.workspace, argv)
        try:
            result = run_with_timeout(
                argv,
                timeout_type="query",
                cwd=str(self.workspace),
                capture_output=True,
                text=True,
            )
        except subprocess.TimeoutExpired as exc:
            raise QueryTimeoutError(
                f"bazel query timed out after {exc.timeout:g}s: {self.expression}",
                context={"workspace": str(self.workspace), "expression": self.expression},
            ) from exc
        except OSError as exc:
            # FileNotFoundError when the executable is missing.
            raise QueryProcessError(
                f"could not run {argv[0]}: {exc}",
                context={"workspace": str(self.workspace), "executable": argv[0]},
            ) from exc

        if result.returncode != 0:
            stderr = (result.stderr or "").strip()
            detail = stderr.splitlines()[-1] if stderr else "no error output"
            raise QueryProcessError(
                f"{argv[0]} query exited with status {result.returncode}: {detail}",
                returncode=result.returncode,
                stderr=stderr,
                context={"workspace": str(self.workspace), "expression": self.expression},
            )
        return result.stdout or ""

    def parse(self, stdout: str) -> QueryResult:
        parser = get_parser(self.config.output)
        if parser is None:
            raise QueryParseError(
                f"No parser for query output format '{self.config.output}'",
                context={"available": list_parsers()},
            )
        return parser(stdout)

    async def run_and_parse(self) -> QueryResult:
        """Run the query on a worker thread, then parse its output."""
        stdout = await asyncio.to_thread(self.run)
        return self.parse(stdout)


class BazelQueryRunner:
    """Default :class:`QueryRunner` backed by the ``bazel`` executable."""

    def __init__(self, config: Optional[QueryConfig] = None) -> None:
        self._config = config

    async def run_query(
        self,
        working_directory: Path,
        expression: str,
        extra_args: Sequence[str] = (),
    ) -> QueryResult:
        query = BazelQuery(working_directory, expression, extra_args, config=self._config)
        result = await query.run_and_parse()
        logger.debug("%s returned %d rule(s)", expression, len(result))
        return result


__all__ = ["QueryRunner", "BazelQuery", "BazelQueryRunner"]
