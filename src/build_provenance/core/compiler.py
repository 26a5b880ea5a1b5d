"""Compiler and documentation generator version probing."""

from __future__ import annotations

import subprocess

from build_provenance.utils.errors import CompilerProbeError
from build_provenance.utils.logging import get_logger

logger = get_logger("core.compiler")


def get_version_from_cmd(executable: str) -> str:
    """Run `<executable> -V` and return its output without the trailing newline.

    No timeout is applied; the build driver owns that.

    Raises:
        CompilerProbeError: If the executable cannot be run or exits non-zero
    """
    try:
        completed = subprocess.run(
            [executable, "-V"],
            capture_output=True,
            check=False,
        )
    except OSError as e:
        raise CompilerProbeError(executable, str(e)) from e

    if completed.returncode != 0:
        stderr = completed.stderr.decode("utf-8", errors="replace").strip()
        raise CompilerProbeError(executable, f"exit status {completed.returncode}: {stderr}")

    try:
        output = completed.stdout.decode("utf-8")
    except UnicodeDecodeError as e:
        raise CompilerProbeError(executable, "output is not valid UTF-8") from e
    logger.debug("%s -V: %s", executable, output.strip())
    return output.rstrip("\r\n")
