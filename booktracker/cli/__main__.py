import sys

from .admin_commands import main

sys.exit(main())
