import sys

from shuffly.cli import main

sys.exit(main())
