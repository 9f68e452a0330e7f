"""Allow ``python -m fastdash``."""

from fastdash.cli import main

main()
