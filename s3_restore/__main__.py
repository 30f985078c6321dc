import sys

from s3_restore.cli import main

sys.exit(main())
