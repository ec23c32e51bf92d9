import sys

from permsearch.cli import main

sys.exit(main())
