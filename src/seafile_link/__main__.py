import sys

from .main_flow import main

sys.exit(main())
