import sys

from cmdmux.cli.main import main

sys.exit(main())
