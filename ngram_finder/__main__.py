import sys

from ngram_finder.cli import main

if __name__ == "__main__":
    sys.exit(main())
