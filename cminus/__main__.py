import sys

from .compiler import main

sys.exit(main())
