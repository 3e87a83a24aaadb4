import subprocess
from pathlib import Path


class SubprocessRunner:
    """ProcessRunnerPort backed by subprocess; output goes to the terminal."""

    def run(self, args: list[str], cwd: Path) -> int:
        completed = subprocess.run(args, cwd=cwd, check=False)
        return completed.returncode
