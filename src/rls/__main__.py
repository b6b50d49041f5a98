import sys

from rls.cli import main

sys.exit(main())
