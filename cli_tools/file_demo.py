"""Write a fixed string to example.txt, read it back and print it."""

import os
import sys
from pathlib import Path
from typing import Optional, Union

from utils.logging_utils import get_tagged_logger, setup_logging

logger = get_tagged_logger(__name__, tag="file_demo")

DEMO_FILE_NAME = "example.txt"
DEMO_CONTENT = "Hello from Python"

PathLike = Union[str, Path]


def write_demo_file(path: PathLike) -> None:
    """Overwrite `path` with DEMO_CONTENT."""
    Path(path).write_text(DEMO_CONTENT, encoding="utf-8")


def read_demo_file(path: PathLike) -> str:
    """Return the full UTF-8 text of `path`. I/O errors propagate."""
    return Path(path).read_text(encoding="utf-8")


def main(path: Optional[PathLike] = None) -> int:
    """
    Run the demo against `path` (default: example.txt in the working directory).

    I/O errors are not caught; the script dies with the traceback.
    """
    setup_logging(level=os.getenv("LOG_LEVEL", "WARNING"), job_name="file_demo")
    target = Path(path) if path is not None else Path(DEMO_FILE_NAME)

    write_demo_file(target)
    logger.debug(f"Wrote {len(DEMO_CONTENT)} characters to {target}")
    print("File created!")

    print(f"File content: {read_demo_file(target)}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
