# src/jsxbuild/__main__.py
import sys

from jsxbuild.app import main

if __name__ == "__main__":
    sys.exit(main())
