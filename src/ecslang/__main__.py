import sys

from ecslang.cli import main

sys.exit(main())
