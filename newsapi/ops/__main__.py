import sys

from newsapi.ops.cli import main


sys.exit(main())
