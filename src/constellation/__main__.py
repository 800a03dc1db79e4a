import sys

from constellation.cli import main

sys.exit(main())
