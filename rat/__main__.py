import sys

from rat.api.server import main

sys.exit(main())
