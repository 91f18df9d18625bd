import sys

from statestore_lib.cli import main

if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
