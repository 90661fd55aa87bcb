"""Run the reflow command line with ``python -m inkreflow``.

Equivalent to the ``inkreflow`` console script: reads a chapter, Markdown file
or web page (or standard input) and prints the wrapped text.
"""

import sys

from inkreflow.cli import main

if __name__ == "__main__":
    sys.exit(main())
