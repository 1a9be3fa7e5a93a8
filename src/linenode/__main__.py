# SPDX-FileCopyrightText: 2026 Linenode authors
#
# SPDX-License-Identifier: Apache-2.0

from linenode.cli import main

raise SystemExit(main())
