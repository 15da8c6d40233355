import sys

from esfuture.cli import main

sys.exit(main())
