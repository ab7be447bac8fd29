import sys

from railmux.cli import main

sys.exit(main())
