import sys

from mason_gcp.cli.main import main

sys.exit(main())
