import sys

from fixdec.cli import main

sys.exit(main())
