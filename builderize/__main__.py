# SPDX-FileCopyrightText: Michael Popoloski
# SPDX-License-Identifier: MIT

import sys

from builderize.driver import main

if __name__ == "__main__":
    sys.exit(main())
