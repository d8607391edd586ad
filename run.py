import sys

from magfinder.cli import main

if __name__ == '__main__':
    # Settings come from the environment (.env is loaded inside the CLI)
    sys.exit(main())
