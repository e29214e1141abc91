import sys

from pugview.cli._dispatcher import main

sys.exit(main())
