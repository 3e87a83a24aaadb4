import glob
import os
import tempfile
from pathlib import Path


class FileSystemIconSource:
    """Local filesystem implementation of IconSourcePort."""

    def is_dir(self, path: Path) -> bool:
        return Path(path).is_dir()

    def list_files(self, path: Path) -> list[Path]:
        """Regular files directly inside path, sorted by name."""
        return sorted((p for p in Path(path).iterdir() if p.is_file()), key=lambda p: p.name)

    def read_text(self, path: Path) -> str:
        with open(path, encoding="utf-8") as f:
            return f.read()


class FileSystemContentSource:
    """Local filesystem implementation of ContentSourcePort."""

    IGNORE_DIRS = {"node_modules", ".git", "__pycache__"}

    def glob(self, base_dir: Path, pattern: str) -> list[Path]:
        matches = glob.glob(os.path.join(base_dir, pattern), recursive=True)
        files = []
        for match in matches:
            path = Path(match)
            if not path.is_file() or any(part in self.IGNORE_DIRS for part in path.parts):
                continue
            files.append(path)
        return sorted(files)

    def read_text(self, path: Path) -> str:
        with open(path, encoding="utf-8") as f:
            return f.read()


class AtomicFileWriter:
    """Writes output files via a sibling temp file and os.replace."""

    def write_text(self, target: Path, content: str) -> Path:
        target = Path(target)
        target.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{target.name}.", dir=target.parent)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(content)
            os.replace(tmp_name, target)
        except BaseException:
            # Leave no partial output behind
            if os.path.exists(tmp_name):
                os.remove(tmp_name)
            raise
        return target
