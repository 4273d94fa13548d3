import sys

from agent_bootstrap.cli import main

sys.exit(main())
