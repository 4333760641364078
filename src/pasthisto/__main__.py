import sys

from pasthisto.cli import main

sys.exit(main())
