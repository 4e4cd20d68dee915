import sys

from pngops.cli import main

sys.exit(main())
