"""Legacy ``.doc`` conversion delegated to an office suite running headless."""
from __future__ import annotations

import re
import shutil
import subprocess
import tempfile
from pathlib import Path
from typing import Optional, Protocol, Union

from word_html.errors import MissingConvertedOutput, UnreadableExternalConverter
from word_html.utils.logger import get_logger

LOGGER = get_logger(__name__)

BODY_PATTERN = re.compile(r"<body\b[^>]*>(.*)</body\s*>", re.IGNORECASE | re.DOTALL)


class DocumentConverter(Protocol):
    """Anything that turns ``path`` into an HTML file inside ``output_dir``."""

    def convert(self, path: Path, output_dir: Path) -> Path:
        ...


class LibreOfficeConverter:
    """Runs ``libreoffice --headless --convert-to html`` as a subprocess."""

    def __init__(self, executable: str = "libreoffice", timeout: Optional[float] = None) -> None:
        self.executable = executable
        self.timeout = timeout

    def command(self, path: Path, output_dir: Path) -> list:
        return [
            self.executable,
            "--headless",
            "--convert-to",
            "html",
            "--outdir",
            str(output_dir),
            str(path),
        ]

    def convert(self, path: Path, output_dir: Path) -> Path:
        cmd = self.command(path, output_dir)
        LOGGER.debug("Running %s", " ".join(cmd))
        try:
            completed = subprocess.run(
                cmd,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                timeout=self.timeout,
                check=False,
            )
        except subprocess.TimeoutExpired as exc:
            raise UnreadableExternalConverter(
                f"{self.executable} timed out after {self.timeout}s converting {path.name}", exc
            ) from exc
        except OSError as exc:
            raise UnreadableExternalConverter(f"Cannot start {self.executable}: {exc}", exc) from exc

        if completed.returncode != 0:
            stderr = completed.stderr.decode("utf-8", errors="replace").strip()
            raise UnreadableExternalConverter(
                f"{self.executable} exited with status {completed.returncode}: {stderr}"
            )

        output_path = output_dir / f"{path.stem}.html"
        if not output_path.is_file():
            raise MissingConvertedOutput(f"{self.executable} produced no {output_path.name}")
        return output_path


def convert_with(converter: DocumentConverter, path: Union[str, Path]) -> str:
    """Convert ``path`` in a scratch directory and return the fragment it produced.

    Only the contents of ``<body>`` are kept when the output is a full document.
    The scratch directory is removed whether or not the conversion succeeds.
    """
    source = Path(path)
    output_dir = Path(tempfile.mkdtemp(prefix="doc_"))
    try:
        output_path = converter.convert(source, output_dir)
        if not output_path.is_file():
            raise MissingConvertedOutput(f"Converted output {output_path.name} is missing")
        html_text = output_path.read_text(encoding="utf-8", errors="replace")
    finally:
        shutil.rmtree(output_dir, ignore_errors=True)

    fragment = extract_body(html_text)
    if not fragment.strip():
        raise MissingConvertedOutput(f"Converted output for {source.name} is empty")
    return fragment


def extract_body(html_text: str) -> str:
    match = BODY_PATTERN.search(html_text)
    if match is None:
        return html_text
    return match.group(1).strip()
