import sys

from xftmpl.cli import main

sys.exit(main())
