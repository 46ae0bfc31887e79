import sys

from gtfs_archive.cli import main

sys.exit(main())
