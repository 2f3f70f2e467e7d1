import sys

from palette_finder.main import main

sys.exit(main())
