import sys

from spass_converter.cli import main

sys.exit(main())
