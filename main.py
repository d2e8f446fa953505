import sys

from server.start_server import main

sys.exit(main())
