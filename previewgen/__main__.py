import sys

from previewgen.cli import main

sys.exit(main())
